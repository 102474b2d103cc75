"""
Google Fonts stylesheet URL builder.

A font specification maps a family name to the variants requested for it,
using the labels Google Fonts uses in its own metadata ("regular", "italic",
"700", "700italic", ...). The builder normalizes every label to a
(weight, italic) pair and emits one css2 API URL for all families.
"""

from collections import namedtuple
from typing import Dict, Iterable, List, Mapping, Union

GOOGLE_FONTS_CSS2 = 'https://fonts.googleapis.com/css2?'
DEFAULT_WEIGHT = 400

FontVariant = namedtuple('FontVariant', ['weight', 'italic'])

FontSpec = Union[Mapping[str, Iterable[str]], Iterable[str], None]


def parse_variant(label) -> FontVariant:
    """
    Normalize a variant label to a FontVariant.

    Args:
        label: Variant label such as 'regular', 'italic', '700' or '700italic'

    Returns:
        FontVariant(weight, italic)
    """
    label = str(label).strip().lower()
    if label == 'regular':
        return FontVariant(DEFAULT_WEIGHT, False)
    if label == 'italic':
        return FontVariant(DEFAULT_WEIGHT, True)
    if label.endswith('italic') and label[:-len('italic')].isdigit():
        return FontVariant(int(label[:-len('italic')]), True)
    try:
        return FontVariant(int(label), False)
    except ValueError:
        return FontVariant(DEFAULT_WEIGHT, False)


def family_query(family: str, variants: Iterable[str]) -> str:
    """Build the `family=` value for a single font family."""
    name = family.strip().replace(' ', '+')
    parsed = {parse_variant(label) for label in variants} or {FontVariant(DEFAULT_WEIGHT, False)}

    if any(variant.italic for variant in parsed):
        ordered = sorted(parsed, key=lambda v: (v.italic, v.weight))
        if ordered == [FontVariant(DEFAULT_WEIGHT, True)]:
            return f"{name}:ital@1"
        pairs = ';'.join(f"{int(v.italic)},{v.weight}" for v in ordered)
        return f"{name}:ital,wght@{pairs}"

    weights = sorted({variant.weight for variant in parsed})
    if weights == [DEFAULT_WEIGHT]:
        return name
    return f"{name}:wght@{';'.join(str(weight) for weight in weights)}"


def normalize_font_spec(fonts: FontSpec) -> Dict[str, List[str]]:
    """
    Turn any accepted font specification into a family -> variants dict.

    A plain list of family names is the older config form and means the
    regular weight of each family.
    """
    if not fonts:
        return {}
    if isinstance(fonts, str):
        return {fonts: ['regular']}
    if isinstance(fonts, Mapping):
        return {
            family: [variants] if isinstance(variants, (str, int)) else list(variants or [])
            for family, variants in fonts.items()
        }
    return {family: ['regular'] for family in fonts}


def font_url(fonts: FontSpec) -> str:
    """
    Build a Google Fonts css2 stylesheet URL.

    Family order follows the order of the specification. Variants within a
    family are always sorted, so the same specification yields the same URL.

    Returns:
        The stylesheet URL, or an empty string when no fonts are requested.
    """
    spec = normalize_font_spec(fonts)
    if not spec:
        return ''
    families = '&family='.join(family_query(family, variants) for family, variants in spec.items())
    return f"{GOOGLE_FONTS_CSS2}family={families}&display=swap"
