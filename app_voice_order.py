import logging

import streamlit as st

import settings
from catalog import load_catalog
from logging_config import setup_logging
from order_parser import format_currency, parse
from prompts import COMPLETE_PROMPT, LISTEN_PROMPT, confirmation_prompt, load_user_profile

setup_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="VoiceBuy", layout="centered")
st.title("VoiceBuy")
st.markdown("Your voice shopping assistant")

if "stage" not in st.session_state:
    st.session_state["stage"] = "listening"


def go_to(stage, clear_transcript=False):
    st.session_state["stage"] = stage
    if clear_transcript:
        st.session_state["transcript"] = ""


def confirm_order(order):
    logger.info("Order confirmed: %d line(s), total %s", len(order.lines), order.total)
    go_to("complete")


def show_order_table(order):
    df_display = order.to_frame()
    df_display["unit_price"] = df_display["unit_price"].apply(format_currency)
    df_display["line_total"] = df_display["line_total"].apply(format_currency)
    st.table(
        df_display.rename(
            columns={"product": "Product", "quantity": "Qty", "unit_price": "Unit price", "line_total": "Line total"}
        )
    )


catalog, catalog_error = load_catalog(settings.CATALOG_PATH)
if catalog_error is not None:
    st.warning(f"Product catalog unavailable, no items can be recognized: {catalog_error}")

if st.session_state["stage"] == "complete":
    st.success("Order placed successfully!")
    st.write(COMPLETE_PROMPT)
    st.button("Back to Home", key="home", on_click=go_to, args=("listening", True))
    st.stop()

st.write(LISTEN_PROMPT)
transcript = st.text_area("Transcript", key="transcript", height=100, placeholder="e.g. I want 3 milk and bread")

if not transcript.strip():
    st.info("No items yet. Type or paste what was said.")
    st.stop()

order = parse(transcript, catalog, settings.build_matcher())

if settings.DEBUG:
    st.markdown("**Debug — parsing**")
    st.write("Transcript (raw):", transcript)
    st.write("Matcher:", settings.MATCHER)
    st.write("Lines:", len(order.lines))

if order.is_empty:
    st.info("No items recognized.")
else:
    show_order_table(order)
    st.markdown(f"**Total**: {format_currency(order.total)}")

profile = load_user_profile(settings.PROFILE_PATH)
st.write(confirmation_prompt(transcript, profile, order))

left, right = st.columns(2)
with left:
    st.button("Yes, order it", key="confirm", disabled=order.is_empty, on_click=confirm_order, args=(order,))
with right:
    st.button("No, try again", key="retry", on_click=go_to, args=("listening", True))
