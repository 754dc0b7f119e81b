import streamlit as st, random, requests, json, time
import api as API
from gen_data import gen_batch
from components import show_json, show_table

st.title("📡 Telemetry")

# ------------------------
# Session state
# ------------------------
if "generated_msgs" not in st.session_state:
    st.session_state.generated_msgs = []

# ------------------------
# Controls
# ------------------------
col1, col2, col3 = st.columns(3)
with col1:
    total_n = st.number_input("Messages", 1, 5000, 50, key="tel_total")
with col2:
    fleet = st.number_input("Drones in fleet", 1, 50, 3, key="tel_fleet")
with col3:
    batch_size = st.number_input("Batch size", 1, 500, 10, key="tel_batch")

with st.expander("Advanced options"):
    c1, c2, c3 = st.columns(3)
    with c1:
        seed = st.number_input("Random seed", 0, 999999, 0, key="tel_seed")
    with c2:
        rate = st.number_input("Throttle (batches/sec)", 0.0, 100.0, 0.0, 0.1, key="tel_rate")
    with c3:
        broken = st.slider("Messages without lat/lon (%)", 0, 100, 0, key="tel_broken")

def _chunked(seq, size):
    for i in range(0, len(seq), size):
        yield seq[i:i+size]

# ------------------------
# Generate & Preview
# ------------------------
cA, cB = st.columns(2)
with cA:
    if st.button("🎲 Generate telemetry", key="btn_gen"):
        if seed:
            random.seed(int(seed))
        st.session_state.generated_msgs = gen_batch(int(total_n), int(fleet), broken / 100.0)
        st.success(f"Generated {len(st.session_state.generated_msgs)} message(s).")
with cB:
    if st.button("Preview first 2 messages", key="btn_preview"):
        if not st.session_state.generated_msgs:
            st.info("Nothing generated yet — click **Generate telemetry** first.")
        else:
            show_json(st.session_state.generated_msgs[:2], caption="Preview")

st.divider()

# ------------------------
# Send generated telemetry
# ------------------------
if st.session_state.generated_msgs and st.button("➡️ Send to /dji/telemetry", key="btn_send"):
    msgs = st.session_state.generated_msgs
    prog = st.progress(0.0)
    n_batches = (len(msgs) + batch_size - 1) // batch_size
    received = stored = rejected = 0
    last_rows = []
    for i, chunk in enumerate(_chunked(msgs, batch_size), start=1):
        try:
            resp = API.telemetry(chunk)
            received += int(resp.get("received", 0))
            stored += int(resp.get("stored", 0))
            last_rows = resp.get("data") or last_rows
        except requests.HTTPError as e:
            rejected += len(chunk)
            msg = e.response.text[:400] if e.response is not None else str(e)
            st.error(f"[{i}] HTTP error: {msg}")
        except Exception as e:
            rejected += len(chunk)
            st.error(f"[{i}] {e}")
        prog.progress(i / n_batches)
        if rate:
            time.sleep(1.0 / rate)

    st.success("Done.")
    st.write(f"**Messages**: received={received} stored={stored} rejected={rejected} total={len(msgs)}")
    if last_rows:
        show_table(last_rows, caption="Rows stored by the last batch")

st.divider()

# ------------------------
# Manual calls
# ------------------------
cT, cD = st.columns(2)
with cT:
    if st.button("POST /test-insert (defaults)", key="btn_test_insert"):
        try:
            st.success(API.manual_insert())
        except Exception as e:
            st.error(e)
with cD:
    if st.button("GET /dji/test", key="btn_dji_test"):
        try:
            st.success(API.dji_test())
        except Exception as e:
            st.error(e)

payload_text = st.text_area("Paste a message or an array of messages", height=180, key="tel_textarea",
                            placeholder='{"drone_sn":"X1","position":{"lat":63.42,"lng":10.43,"alt":115}}')
if st.button("POST pasted JSON", key="btn_paste_post"):
    try:
        st.success(API.telemetry(json.loads(payload_text)))
    except Exception as e:
        st.error(e)
