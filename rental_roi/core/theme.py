from __future__ import annotations

from typing import Optional

from .storage import KeyValueStore, load_theme, save_theme

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)

_PLOTLY_TEMPLATES = {LIGHT: "plotly_white", DARK: "plotly_dark"}

# Page colours injected as CSS; Streamlit has no runtime theme switch.
_PALETTES = {
    LIGHT: {"background": "#ffffff", "text": "#1f2330", "panel": "#f3f5f9"},
    DARK: {"background": "#0f1218", "text": "#e6e8ee", "panel": "#1a1f2b"},
}


def normalize(theme: Optional[str]) -> str:
    # anything other than "light" is dark
    return LIGHT if theme == LIGHT else DARK


def apply_theme(store: KeyValueStore, theme: Optional[str]) -> str:
    resolved = normalize(theme)
    save_theme(store, resolved)
    return resolved


def resolve_theme(store: KeyValueStore, fallback: str = DARK) -> str:
    """Saved theme when there is a valid one, otherwise ``fallback``."""
    saved = load_theme(store)
    return apply_theme(store, saved if saved in THEMES else fallback)


def plotly_template(theme: str) -> str:
    return _PLOTLY_TEMPLATES[normalize(theme)]


def page_css(theme: str) -> str:
    p = _PALETTES[normalize(theme)]
    return f"""
<style>
.stApp {{ background-color: {p['background']}; color: {p['text']}; }}
section[data-testid="stSidebar"] {{ background-color: {p['panel']}; }}
.stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label {{ color: {p['text']}; }}
</style>
"""
