import logging, sys

# sync routes run in the threadpool; keep the worker name in each line
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s :: %(message)s"

def setup_logging(level: str = "INFO"):
    root = logging.getLogger()
    if root.handlers:  # don’t double add during reload
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(h)
    # per-request access lines only at WARNING and above
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    # paho logs every reconnect attempt at INFO
    logging.getLogger("paho").setLevel(logging.WARNING)
