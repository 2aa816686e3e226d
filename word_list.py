import time
import requests
from utils import log_with_time, vlog


WORD_LIST_URL = (
    "https://gist.githubusercontent.com/ahamburger/8f609c3a57aee907bd426ef66cd6fb1a/raw/"
    "1bef175bfa7da130f0f1ea723b625f0f9a0ce5cb/desmos_distracting_words"
)
FETCH_TIMEOUT = 10


class WordListError(RuntimeError):
    pass


def _split_lines(text):
    # Blank lines are not words; anything else is left for ClassCode to judge.
    return [w.strip() for w in text.split("\n") if w.strip()]


def fetch_word_list(url=WORD_LIST_URL, timeout=None):
    """Fetch a newline separated list of words from ``url``."""
    if timeout is None:
        timeout = FETCH_TIMEOUT
    t0 = time.time()
    log_with_time("⟳ Downloading forbidden word list…")
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise WordListError("Network or permission failure when fetching list") from e
    if not resp.ok:
        raise WordListError(f"Fetching list: {resp.reason}")
    words = _split_lines(resp.text)
    vlog(f"Word list downloaded ({len(words)} lines)", t0)
    return words


def load_word_file(path):
    """Read a newline separated list of words from a local file."""
    with open(path, "r", encoding="utf-8") as f:
        words = _split_lines(f.read())
    vlog(f"Word list loaded from {path} ({len(words)} lines)")
    return words
