"""
Streamlit frontend for Course Tree Search.

Calls GET http://localhost:8000/search and displays the matching course
items as an indented tree.
"""

import html
import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.ui import (
    APP_SUBTITLE,
    APP_TITLE,
    SEARCH_PLACEHOLDER,
    UIError,
    can_submit,
    fetch_tree,
    tree_rows,
)
from search.config import BACKEND_URL
from tree.render import EMPTY_STATE_MESSAGE

st.set_page_config(page_title=APP_TITLE, layout="centered")
st.title(APP_TITLE)
st.caption(APP_SUBTITLE)

if "results" not in st.session_state:
    st.session_state.results = []
    st.session_state.error = None
    st.session_state.has_searched = False

with st.form("search_form"):
    query = st.text_input("Search course tree", placeholder=SEARCH_PLACEHOLDER)
    submitted = st.form_submit_button("Search")

if submitted and can_submit(query):
    st.session_state.results = []
    st.session_state.error = None
    st.session_state.has_searched = True

    with st.spinner("Searching..."):
        try:
            st.session_state.results = fetch_tree(query, BACKEND_URL)
        except UIError as exc:
            st.session_state.error = str(exc)

if st.session_state.error:
    st.error(st.session_state.error)
elif st.session_state.has_searched:
    rows = tree_rows(st.session_state.results)
    if not rows:
        st.info(EMPTY_STATE_MESSAGE)
    for depth, label in rows:
        pad = depth * 1.5
        st.markdown(
            f"<div style='padding-left: {pad}rem'>{html.escape(label)}</div>",
            unsafe_allow_html=True,
        )
