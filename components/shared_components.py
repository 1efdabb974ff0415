# components/shared_components.py
import streamlit as st
from typing import List, Callable, Any, Optional

from core.utils import format_inr


def render_selection_box(
    label: str,
    options: List[Any],
    format_func: Callable[[Any], str],
    key: str,
    help_text: str = "",
    index: int = 0
) -> Optional[Any]:
    """
    Selectbox over a list of records (members, responsible members, ...).

    Returns the chosen record, or None when there is nothing to choose from.
    """
    if not options:
        st.warning(f"⚠️ No options available for '{label}'.")
        return None

    # Select by position so the widget state survives reloads of the underlying records
    selected_position = st.selectbox(
        label=label,
        options=range(len(options)),
        format_func=lambda i: format_func(options[i]),
        index=min(index, len(options) - 1),
        key=key,
        help=help_text
    )

    return options[selected_position] if selected_position is not None else None


def render_confirmation_dialog(
    item_name: str,
    on_confirm: Callable,
    on_cancel: Callable,
    dialog_key: str,
    warning_text: str = ""
):
    """
    Inline delete confirmation for a payment, user or notification.

    on_confirm is responsible for its own rerun so the page can show a toast first.
    """
    with st.container(border=True):
        st.warning(f"⚠️ Delete **{item_name}**?")
        st.caption(warning_text or "This cannot be undone.")

        confirm_col, cancel_col, _ = st.columns([1, 1, 3])
        with confirm_col:
            if st.button("🗑️ Delete", type="primary", key=f"confirm_{dialog_key}"):
                on_confirm()
        with cancel_col:
            if st.button("Keep", key=f"cancel_{dialog_key}"):
                on_cancel()
                st.rerun()


def notify_result(success: bool, message: str):
    """Report an action outcome as a toast, which persists across the st.rerun() that follows."""
    if success:
        st.toast(message)
    else:
        st.toast(f"❌ {message}")


def render_stat_card(title: str, value: str, subtitle: str = "", icon: str = ""):
    with st.container(border=True):
        st.metric(label=f"{icon} {title}".strip(), value=value)
        if subtitle:
            st.caption(subtitle)


def render_progress(label: str, paid: float, target: float, percent: float):
    """Progress bar with the paid / target amounts underneath."""
    st.markdown(f"**{label}** · {percent:.1f}%")
    st.progress(min(max(percent, 0.0), 100.0) / 100)
    st.caption(f"{format_inr(paid)} of {format_inr(target)}")
