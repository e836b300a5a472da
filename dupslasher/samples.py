"""Built-in sample corpus used by ``dupslasher demo`` and the tests.

It holds two reworded Wikipedia paragraphs, a song lyric with one word
swapped throughout, an exact duplicate sentence, a short unrelated
sentence and two revisions of the example.com notice.
"""
from __future__ import annotations

from typing import List

CROATIA = (
    "Since 2000, the Vatreni have qualified for every major tournament except UEFA Euro 2000 and the 2010 FIFA "
    "World Cup. At the World Cup, Croatia has finished second once (2018) and third on two occasions (1998, 2022), "
    "securing three World Cup medals. Davor Šuker won the Golden Shoe and the Silver Ball in 1998, while Luka "
    "Modrić won the Golden Ball in 2018 and the Bronze Ball in 2022. The team has reached the quarter-finals of the "
    "UEFA European Championship twice (1996, 2008). They finished second in the UEFA Nations League in 2023."
)

CROATIA_EDITED = (
    "Since 2000, the Vatreni have not qualified for every minor tournament except for the 2010 FIFA World Cup. At "
    "the World Cup, Croatia has finished second once (2018) and third on two occasions (1998, 2022), securing three "
    "World Cup medals. Davor Šuker won the Golden Shoe and the Silver Ball in 1998, while Luka Modrić won the Golden "
    "Ball in 2018 and the Bronze Ball in 2022. The team has not reached the quarter-finals of the UEFA European "
    "Championship twice (1996, 2008). They finished third in the UEFA Nations League in 2023."
)

ROSES_RED = (
    "Roses are red, my love, doo-roo-roo-roo\n"
    "A long-long time ago, on graduation day\n"
    "You handed me your book, I signed this way\n"
    "Roses are red, my love, violets are blue\n"
    "Sugar is sweet, my love, but not as sweet as you\n"
    "We dated through high school, and when the big day came\n"
    "I wrote into your book, next to my name\n"
    "Roses are red, my love, violets are blue\n"
    "Sugar is sweet, my love, but not as sweet as you\n"
    "(As sweet as you)\n"
    "Then I went far away and you found someone new\n"
    "I read your letter, dear, and I wrote back to you\n"
    "Roses are red, my love, violets are blue\n"
    "Sugar is sweet, my love, good luck, may God bless you\n"
    "(May God bless you)\n"
    "Is that your little girl? She looks a lot like you\n"
    "Someday, some boy will write in her book too\n"
    "Roses are red, my love, violets are blue\n"
    "Sugar is sweet, my love, but not as sweet as you\n"
    "Roses are red\n"
)

ROSES_BLUE = ROSES_RED.replace("Roses are red", "Roses are blue")

QUICK_FOX = "The quick brown fox jumps over the lazy dog"

DIFFERENT = "different than the others"

EXAMPLE_DOMAIN = (
    "As described in RFC 2606 and RFC 6761, a number of domains such as example.com and example.org are maintained "
    "for documentation purposes. These domains may be used as illustrative examples in documents without prior "
    "coordination with us. They are not available for registration or transfer. We provide a web service on the "
    "example domain hosts to provide basic information on the purpose of the domain. These web services are "
    "provided as best effort, but are not designed to support production applications. While incidental traffic "
    "for incorrectly configured applications is expected, please do not design applications that require the "
    "example domains to have operating HTTP service."
)

EXAMPLE_DOMAIN_EDITED = (
    "As described in RFC 11111 or RFC 6761, many domains such as example.com and example.org are maintained for "
    "various purposes. These domains may be used as illustrative examples in documents without previously "
    "coordinating with us. They are not available for registration or transfer. We provide a web service on the "
    "example domain hosts to provide basic information on the purpose of the domain. These web services are "
    "provided as best effort, but are not designed to support production applications. While incidental traffic "
    "for misconfigured applications is expected, please do not design applications that require the example "
    "domains to have operating HTTP service."
)


def sample_corpus() -> List[str]:
    """Return the demo corpus in its canonical order."""
    return [
        CROATIA,
        CROATIA_EDITED,
        ROSES_RED,
        ROSES_BLUE,
        QUICK_FOX,
        QUICK_FOX,
        DIFFERENT,
        EXAMPLE_DOMAIN,
        EXAMPLE_DOMAIN_EDITED,
    ]
