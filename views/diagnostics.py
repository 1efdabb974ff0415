# views/diagnostics.py
import streamlit as st

from core.config import API_BASE_URL
from services.diagnostics_service import DiagnosticsService


def show_diagnostics_page():
    st.header("🩺 API Diagnostics")
    st.markdown(f"Check the backend at `{API_BASE_URL}` with your current credentials.")

    if not st.button("▶️ Run Diagnostics", type="primary"):
        return

    with st.spinner("Testing endpoints..."):
        results = DiagnosticsService.test_all_endpoints()

    st.caption(f"Status: **{results['status']}**")
    for endpoint, result in results["endpoints"].items():
        with st.container(border=True):
            if result["status"] == "success":
                st.success(f"✅ {endpoint} · {result['count']} records")
                if result.get("sample") is not None:
                    with st.expander("Sample record"):
                        st.json(result["sample"])
            else:
                st.error(f"❌ {endpoint} · {result.get('error', 'Unknown error')}")
