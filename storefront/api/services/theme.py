"""Storefront theme: settings schema, defaults and stylesheet rendering.

Theme values are persisted flat (``theme_<key>``) by
``SettingsRepository``; this module validates what goes in and turns
what comes out into CSS.
"""

import os
from pathlib import Path
from typing import Dict, Literal, Mapping, Optional

from pydantic import ConfigDict, Field, model_validator

from storefront.api.models import CamelModel
from storefront.errors import InternalError
from storefront.logging_config import get_logger

logger = get_logger(__name__)

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"
# Keeps a font family from closing the CSS declaration it is written into
FONT_FAMILY_PATTERN = r"^[\w\s,'\"-]+$"

ButtonStyle = Literal["rounded", "square", "pill"]

BUTTON_RADIUS: Dict[str, str] = {
    "rounded": "0.375rem",
    "square": "0",
    "pill": "9999px",
}

DEFAULT_THEME: Dict[str, str] = {
    "primaryColor": "#dc2626",
    "secondaryColor": "#991b1b",
    "backgroundColor": "#ffffff",
    "textColor": "#1f2937",
    "headerBackground": "#ffffff",
    "footerBackground": "#1f2937",
    "buttonStyle": "rounded",
    "fontFamily": "Inter",
    "logoUrl": "",
    "heroTitle": "Godless America",
    "heroSubtitle": "Premium merchandise for the rebellious spirit",
    "customCSS": "",
}


class ThemeSettings(CamelModel):
    """Theme values accepted by ``PUT /admin/theme``.

    Every field is optional: only the keys sent are stored. Keys outside
    the known set are kept as custom settings as long as the key is an
    identifier and the value a string.
    """

    model_config = ConfigDict(extra="allow")

    primary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    secondary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    background_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    text_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    header_background: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    footer_background: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    button_style: Optional[ButtonStyle] = None
    font_family: Optional[str] = Field(default=None, max_length=100, pattern=FONT_FAMILY_PATTERN)
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    hero_title: Optional[str] = Field(default=None, max_length=255)
    hero_subtitle: Optional[str] = Field(default=None, max_length=500)
    custom_css: Optional[str] = Field(default=None, alias="customCSS", max_length=50_000)

    @model_validator(mode="after")
    def _check_custom_keys(self) -> "ThemeSettings":
        for key, value in (self.model_extra or {}).items():
            if not key.isidentifier():
                raise ValueError(f"Custom theme key '{key}' must be an identifier")
            if not isinstance(value, str):
                raise ValueError(f"Custom theme value for '{key}' must be a string")
        return self

    def to_storage(self) -> Dict[str, str]:
        """Flat mapping of the keys that were sent, as stored (camelCase)."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


def merge_with_defaults(stored: Mapping[str, str]) -> Dict[str, str]:
    return {**DEFAULT_THEME, **stored}


def render_theme_css(settings: Mapping[str, str]) -> str:
    """Render theme settings (merged over the defaults) into a stylesheet."""
    theme = merge_with_defaults(settings)
    radius = BUTTON_RADIUS.get(theme["buttonStyle"], BUTTON_RADIUS["rounded"])

    return f"""/* Auto-generated theme CSS */
:root {{
  --primary-color: {theme['primaryColor']};
  --secondary-color: {theme['secondaryColor']};
  --background-color: {theme['backgroundColor']};
  --text-color: {theme['textColor']};
  --header-background: {theme['headerBackground']};
  --footer-background: {theme['footerBackground']};
}}

body {{
  background-color: var(--background-color);
  color: var(--text-color);
  font-family: {theme['fontFamily']}, sans-serif;
}}

.btn-primary {{
  background-color: var(--primary-color);
  border-color: var(--primary-color);
  border-radius: {radius};
}}

.btn-primary:hover {{
  background-color: var(--secondary-color);
  border-color: var(--secondary-color);
}}

header {{
  background-color: var(--header-background);
}}

footer {{
  background-color: var(--footer-background);
}}

.text-primary {{
  color: var(--primary-color);
}}

.bg-primary {{
  background-color: var(--primary-color);
}}

.border-primary {{
  border-color: var(--primary-color);
}}

/* Custom CSS */
{theme['customCSS']}
"""


def write_stylesheet(css: str, css_path: str | Path) -> Path:
    """Atomically replace the stylesheet at css_path.

    Raises:
        InternalError: If the file cannot be written
    """
    path = Path(css_path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(css, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Failed to write theme stylesheet {path}: {e}")
        raise InternalError("Failed to generate CSS file") from e

    logger.info("Wrote theme stylesheet", extra={"path": str(path), "bytes": len(css)})
    return path
