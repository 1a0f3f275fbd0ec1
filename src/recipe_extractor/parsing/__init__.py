"""Pure normalization helpers for scraped and stored recipe data."""

from recipe_extractor.parsing.caption import (
    CaptionRecipe,
    infer_category,
    parse_caption,
)
from recipe_extractor.parsing.difficulty import (
    determine_difficulty,
    difficulty_from_text,
)
from recipe_extractor.parsing.duration import (
    format_minutes,
    parse_iso8601_duration,
    parse_time_value,
    time_to_minutes,
)
from recipe_extractor.parsing.text import (
    decode_html_entities,
    extract_hashtags,
    format_recipe_title,
    normalize_ingredient,
    normalize_instruction,
)
from recipe_extractor.parsing.values import (
    DecodeResult,
    collect_image_urls,
    decode_string_list,
    extract_first_image_url,
    extract_first_value,
)


__all__ = [
    "CaptionRecipe",
    "DecodeResult",
    "collect_image_urls",
    "decode_html_entities",
    "decode_string_list",
    "determine_difficulty",
    "difficulty_from_text",
    "extract_first_image_url",
    "extract_first_value",
    "extract_hashtags",
    "format_minutes",
    "format_recipe_title",
    "infer_category",
    "normalize_ingredient",
    "normalize_instruction",
    "parse_caption",
    "parse_iso8601_duration",
    "parse_time_value",
    "time_to_minutes",
]
