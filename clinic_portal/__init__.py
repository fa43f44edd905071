"""Streamlit front end for the clinic management backend."""

__version__ = "0.1.0"
