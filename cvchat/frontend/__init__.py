"""Streamlit front end: session state, widget callbacks and screens."""
