"""
Theme constants and CSS injection for Idea-Verse.
Keyword colors come from config; everything else about the look lives here.
"""

import html

import streamlit as st
from dataclasses import dataclass

from idea_verse.core.keywords import keyword_color


@dataclass(frozen=True)
class Theme:
    """Central theme configuration."""
    # Accent gradient
    accent_start: str = "#0de7ff"
    accent_end: str = "#8a38f5"

    # Backgrounds
    bg_space: str = "#05060f"
    bg_nebula: str = "#111327"
    bg_card: str = "rgba(20, 22, 40, 0.85)"
    bg_card_hover: str = "rgba(13, 231, 255, 0.12)"

    # Text
    text_primary: str = "#e2e8f0"
    text_secondary: str = "#94a3b8"
    text_body: str = "#cbd5e1"

    # Accents
    accent_selected: str = "#10b981"
    accent_bookmark: str = "#ffae2b"

    # Borders
    border_subtle: str = "rgba(13, 231, 255, 0.25)"
    border_focus: str = "rgba(13, 231, 255, 0.55)"


THEME = Theme()


def get_css() -> str:
    """Generate CSS using theme constants."""
    return f"""
<style>
    [data-testid="stAppViewContainer"] {{
        background: radial-gradient(ellipse at top, {THEME.bg_nebula} 0%, {THEME.bg_space} 70%);
    }}

    [data-testid="stSidebar"] {{
        background: rgba(5, 6, 15, 0.95);
    }}

    .iv-header {{
        font-family: 'JetBrains Mono', 'Fira Code', 'SF Mono', monospace;
        background: linear-gradient(90deg, {THEME.accent_start} 0%, {THEME.accent_end} 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        background-clip: text;
        font-size: 2.4rem;
        font-weight: 700;
        margin-bottom: 0;
    }}

    .iv-subheader {{
        color: {THEME.text_secondary};
        font-size: 1rem;
        margin-top: 0.25rem;
    }}

    .iv-card {{
        background: {THEME.bg_card};
        border: 1px solid {THEME.border_subtle};
        border-radius: 12px;
        padding: 1.25rem 1.5rem;
        margin: 0.75rem 0;
    }}

    .iv-card:hover {{
        border-color: {THEME.border_focus};
    }}

    .iv-card-title {{
        color: {THEME.text_primary};
        font-size: 1.15rem;
        font-weight: 600;
        margin-bottom: 0.5rem;
    }}

    .iv-card-meta {{
        color: {THEME.text_secondary};
        font-size: 0.8rem;
        margin-bottom: 0.75rem;
    }}

    .iv-card-text {{
        color: {THEME.text_body};
        font-size: 0.95rem;
        line-height: 1.6;
        white-space: pre-wrap;
        max-height: 320px;
        overflow-y: auto;
    }}

    .iv-bookmark {{
        color: {THEME.accent_bookmark};
    }}

    /* Keyword chip; background is set inline per keyword */
    .iv-chip {{
        color: #05060f;
        padding: 0.15rem 0.6rem;
        border-radius: 12px;
        font-size: 0.75rem;
        font-weight: 600;
        margin-right: 0.35rem;
        display: inline-block;
    }}

    .iv-badge {{
        background: linear-gradient(90deg, {THEME.accent_start} 0%, {THEME.accent_end} 100%);
        color: white;
        padding: 0.25rem 0.75rem;
        border-radius: 20px;
        font-size: 0.8rem;
        font-weight: 600;
        display: inline-block;
    }}

    .iv-error {{
        background: rgba(239, 68, 68, 0.1);
        border: 1px solid rgba(239, 68, 68, 0.3);
        border-radius: 8px;
        padding: 0.75rem 1rem;
        color: #fca5a5;
        margin: 0.5rem 0;
        font-size: 0.9rem;
    }}

    .iv-info {{
        background: {THEME.bg_card_hover};
        border: 1px solid {THEME.border_subtle};
        border-radius: 8px;
        padding: 0.75rem 1rem;
        color: {THEME.text_primary};
        margin: 0.5rem 0;
        font-size: 0.85rem;
    }}

    [data-baseweb="tab"][aria-selected="true"] {{
        background: linear-gradient(90deg, {THEME.accent_start} 0%, {THEME.accent_end} 100%);
        color: white;
        border-radius: 8px 8px 0 0;
    }}

    [data-testid="stMetric"] {{
        background: {THEME.bg_card};
        padding: 0.75rem;
        border-radius: 8px;
        border: 1px solid {THEME.border_subtle};
    }}

    .iv-caption {{
        color: {THEME.text_secondary};
        font-size: 0.8rem;
        margin-top: 0.25rem;
    }}
</style>
"""


def inject_styles() -> None:
    """Inject CSS styles into the Streamlit app."""
    st.markdown(get_css(), unsafe_allow_html=True)


def render_header() -> None:
    """Render the styled application header."""
    st.markdown('<h1 class="iv-header">Idea-Verse</h1>', unsafe_allow_html=True)
    st.markdown(
        '<p class="iv-subheader">A constellation of your ideas, grouped by keyword</p>',
        unsafe_allow_html=True,
    )


def keyword_chips(keywords: list[str]) -> str:
    """HTML chips for a list of keywords, colored like their groups."""
    return "".join(
        f"<span class='iv-chip' style='background:{keyword_color(k)}'>{html.escape(k)}</span>"
        for k in keywords
    )


def render_error(message: str) -> None:
    """Render a styled error message."""
    st.markdown(f'<div class="iv-error">{html.escape(message)}</div>', unsafe_allow_html=True)


def render_info(message: str) -> None:
    """Render a styled info message."""
    st.markdown(f'<div class="iv-info">{message}</div>', unsafe_allow_html=True)
