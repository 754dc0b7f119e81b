import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:3000")
S = requests.Session(); S.headers.update({"Content-Type":"application/json"})

def healthz():   r=S.get(f"{API}/healthz",timeout=10); r.raise_for_status(); return r.json()
def telemetry(b):r=S.post(f"{API}/dji/telemetry",json=b,timeout=60); r.raise_for_status(); return r.json()
def dji_test():  r=S.get(f"{API}/dji/test",timeout=30); r.raise_for_status(); return r.json()
def manual_insert(**fields):
    # empty body -> server-side defaults (test-drone over Trondheim)
    r = S.post(f"{API}/test-insert", json=fields or None, timeout=30)
    r.raise_for_status()
    return r.json()
