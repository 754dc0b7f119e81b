# client/streamlit_app.py
import os
import requests
import streamlit as st
import api as API

st.set_page_config(page_title="DJI Relay Client", layout="wide")
st.title("🛰️ DJI Telemetry Relay")

st.markdown("""
Send fake or pasted DJI telemetry through the relay and watch what reaches the store.

Pages:
- **📡 Telemetry** — generate DJI-style messages (every position shape the relay accepts, optionally some without lat/lon), POST them to `/dji/telemetry`, and run `/test-insert` or `/dji/test`.
""")

with st.sidebar:
    st.header("Relay")
    st.caption(f"API: `{os.getenv('API_BASE_URL', 'http://localhost:3000')}`")
    if st.button("Refresh status"):
        try:
            h = API.healthz()
            st.metric("Store backend", h.get("store", "?"))
            if h.get("store_configured"):
                st.success("Store configured")
            else:
                st.error("Store not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)")
            if h.get("broker_connected"):
                st.success("DJI broker connected")
            else:
                st.warning("DJI broker not connected")
        except requests.RequestException as e:
            st.error(f"Relay unreachable: {e}")

st.info("Set `API_BASE_URL` in `.env` (see `.env.sample`), then `streamlit run client/streamlit_app.py`.")
