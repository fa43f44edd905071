from dataclasses import dataclass

import streamlit as st

from clinic_portal.config import APP_ICON, APP_TITLE


@dataclass(frozen=True)
class Notice:
    level: str
    text: str

    @classmethod
    def success(cls, text):
        return cls("success", text)

    @classmethod
    def error(cls, text):
        return cls("error", text)


def show(notice: Notice | None) -> None:
    if notice is None:
        return
    getattr(st, notice.level)(notice.text)


def render_logo(container=st) -> None:
    container.markdown(f"## {APP_ICON} {APP_TITLE}")


NOTICES_KEY = "notices"


def post(state, notice: Notice | None) -> None:
    """Queue a notice for the next render; used from widget callbacks."""
    if notice is None:
        return
    state.setdefault(NOTICES_KEY, []).append(notice)


def render_notices(state) -> None:
    for notice in state.pop(NOTICES_KEY, []):
        show(notice)
