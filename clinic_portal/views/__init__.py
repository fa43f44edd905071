"""Streamlit views of the portal.

Each view splits into handlers that act on the session store, navigator and
modal controller (and return :class:`Notice` values), and ``render_*``
functions that draw widgets and call those handlers.
"""
