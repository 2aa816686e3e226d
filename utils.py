# --- utils.py ---

import time
import threading
import json
from colorama import Fore, Style, init
import os

init()

VERBOSE = False
start_time = None

# Lock used for synchronized printing across threads
PRINT_LOCK = threading.Lock()

def log_with_time(msg, color=Fore.LIGHTBLUE_EX):
    """Print ``msg`` with a timestamp."""
    global start_time
    if start_time is None:
        start_time = time.time()
    elapsed = time.time() - start_time
    mins = int(elapsed // 60)
    secs = elapsed % 60
    timestamp = Style.DIM + f"[{mins:02}:{secs:06.3f}]" + Style.RESET_ALL
    with PRINT_LOCK:
        print(f"{timestamp} {color}{msg}{Style.RESET_ALL}", flush=True)

def vlog(msg, t0=None):
    if VERBOSE:
        if t0 is not None:
            elapsed = time.time() - t0
            log_with_time(f"{msg} (took {elapsed:.3f}s)")
        else:
            log_with_time(msg)

def log_codes_to_file(codes, source=None, logs_dir=None):
    """Append ``codes`` to the day's JSON log in the `logs` directory.
    The file keeps every code handed out that day plus the word list source they were checked against."""
    if logs_dir is None:
        logs_dir = os.path.join(os.getcwd(), 'logs')
    os.makedirs(logs_dir, exist_ok=True)
    log_file = os.path.join(logs_dir, f"codes_{time.strftime('%Y-%m-%d')}.json")

    log_data = {"source": source, "codes": []}

    # If file exists, keep the codes already logged today
    if os.path.exists(log_file):
        try:
            with open(log_file, 'r') as f:
                existing = json.load(f)
        except (OSError, ValueError):
            log_with_time(f"Could not read {log_file}; starting a new log.", color=Fore.YELLOW)
        else:
            log_data["codes"] = list(existing.get("codes", []))
            if source is None:
                log_data["source"] = existing.get("source")

    log_data["codes"].extend(codes)

    with open(log_file, 'w') as f:
        json.dump(log_data, f, indent=2)
    log_with_time(f"Logged {len(codes)} code(s) to {log_file}", color=Fore.GREEN)
    return log_file
