from dataclasses import replace

import streamlit as st

from patch_textures.assets import KNOWN_GAMES, GameAssets, game_assets_from_env

__all__ = ["set_default_config", "get_config_from_widgets"]


def set_default_config() -> None:
    if "config" not in st.session_state:
        st.session_state["config"] = game_assets_from_env()


def get_config_from_widgets() -> GameAssets:
    current: GameAssets = st.session_state["config"]
    st.subheader("Game")
    games = list(KNOWN_GAMES)
    if current.game not in games:
        games.append(current.game)
    game = st.selectbox("Game", games, index=games.index(current.game), key="game_select")
    asset_root = st.text_input("Asset root", value=current.asset_root, key="asset_root")
    st.subheader("Patches")
    patch_extension = st.text_input(
        "Patch extension", value=current.patch_extension, key="patch_extension"
    )
    return replace(
        current, game=game, asset_root=asset_root, patch_extension=patch_extension
    )
