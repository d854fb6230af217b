import asyncio
from typing import List, Tuple

import streamlit as st
from PIL.Image import Image

from config import GameAssets, get_config_from_widgets, set_default_config
from patch_textures.assets import render_all_textures
from patch_textures.texture import Texture

COLUMNS = 6

st.set_page_config(layout="wide", page_title="Texture Viewer")


@st.cache_resource(show_spinner="Loading textures...")
def render_game(assets: GameAssets) -> List[Tuple[Texture, Image]]:
    return asyncio.run(render_all_textures(assets))


# --------- Main App ---------

set_default_config()
tab_textures, tab_config = st.tabs(["Textures", "Config"])

with tab_config:
    config: GameAssets = get_config_from_widgets()
    if st.button("Save", key="save_config_btn", use_container_width=True):
        st.session_state["config"] = config
    st.divider()

with tab_textures:
    assets: GameAssets = st.session_state["config"]
    st.info(f"Rendering textures for **{assets.game}**", icon="🧱")
    try:
        rendered = render_game(assets)
    except (OSError, ValueError, LookupError) as e:
        st.error(f"Rendering failed: {e}")
        st.stop()

    st.caption(f"{len(rendered)} textures")
    columns = st.columns(COLUMNS)
    for idx, (texture, image) in enumerate(rendered):
        with columns[idx % COLUMNS]:
            st.image(image, caption=f"{texture.name} ({texture.width}x{texture.height})")
