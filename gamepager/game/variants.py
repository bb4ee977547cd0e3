""" Game variants: which nations every game of a variant has """

from typing import Optional


VARIANT_NATIONS: dict[str, tuple[str, ...]] = {
    'Classical': ('Austria', 'England', 'France', 'Germany', 'Italy', 'Russia', 'Turkey'),
    'Pure': ('Austria', 'England', 'France', 'Germany', 'Italy', 'Russia', 'Turkey'),
    'Hundred': ('Burgundy', 'England', 'France'),
    'Youngstown Redux': ('Austria', 'Britain', 'China', 'France', 'Germany', 'India', 'Italy', 'Japan', 'Russia', 'Turkey'),
}


def variant_nations(variant: Optional[str]) -> tuple[str, ...]:
    """ Get nations of a variant. Unknown variants have none """
    return VARIANT_NATIONS.get(variant or '', ())
