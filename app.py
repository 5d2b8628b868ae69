import asyncio

import streamlit as st

from weathercal.library import ServiceWidgetLibrary
from weathercal.llm_service import OpenRouterLLM
from weathercal.settings import settings
from weathercal.widget_service import PREVIEW_SIZES, build_widget

st.set_page_config(page_title="Weather Cal (preview)", page_icon="🌤")
st.markdown("""
<style>
.block-container { max-width: 820px; margin: auto; padding-top: 1rem; }
pre, code { white-space: pre-wrap; }
</style>
""", unsafe_allow_html=True)

st.title("🌤 Weather Cal layout preview")

col1, col2 = st.columns([2, 1])
with col1:
    place = st.text_input("Location", value=settings.place)
with col2:
    size = st.selectbox("Preview size", PREVIEW_SIZES, index=PREVIEW_SIZES.index("large"))

if st.button("Build widget", type="primary"):
    place_s = (place or "").strip()
    if not place_s:
        st.warning("Enter a location."); st.stop()

    library = ServiceWidgetLibrary(settings.model_copy(update={"place": place_s}))
    with st.spinner("Asking the model for a layout..."):
        # preview always bypasses the layout cache
        widget = asyncio.run(
            build_widget(
                library,
                OpenRouterLLM(settings),
                script_name=settings.script_name,
                preview=size,
                columns=settings.layout_columns,
                cache_minutes=settings.cache_minutes,
            )
        )

    st.subheader(widget.layout.message)
    st.write("Items: " + (", ".join(widget.layout.item_names()) or "n/a"))

    st.subheader("Layout markup")
    st.code(widget.markup, language="text")

    with st.expander("Model context"):
        st.code(widget.context or "No context: the model was not asked.", language="json")
