import re

import streamlit as st

from waste_sorter.models import icon_for

# Streamlit has no Tailwind, so presentation tags map to plain colors here
TAG_HEX = {
    "bg-emerald-500": "#10b981",
    "bg-amber-700": "#b45309",
    "bg-slate-600": "#475569",
}

_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|>~<$])")


def escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def render_result(item: str, category: str, explanation: str, color: str, provider: str = None):
    icon = icon_for(category)
    background = TAG_HEX.get(color, TAG_HEX["bg-slate-600"])

    html = f"""
    <div style="background-color: {background}; color: white; border-radius: 12px;
                padding: 20px; margin: 12px 0; text-align: center;">
        <div style="font-size: 48px;">{icon}</div>
        <div style="font-size: 24px; font-weight: bold; text-transform: capitalize;">
            {icon} {category}
        </div>
    </div>
    """
    st.markdown(html, unsafe_allow_html=True)
    # Model text is shown as-is, never interpreted as markdown
    st.subheader(escape_markdown(item))
    st.text(explanation)
    if provider:
        st.caption(f"Analyzed with {provider}")
