import argparse
import random
import time
from colorama import Fore

import utils
import word_list
from utils import log_with_time, vlog, PRINT_LOCK
from class_code import ClassCode
from pattern_trie import PatternError
from word_list import WordListError, fetch_word_list, load_word_file


def load_forbidden_words(args):
    if args.no_fetch:
        return [], None
    if args.words_file:
        return load_word_file(args.words_file), args.words_file
    return fetch_word_list(args.url), args.url


def print_codes(codes):
    with PRINT_LOCK:
        for code in codes:
            print(Fore.GREEN + code + Fore.RESET, flush=True)


def run_cli(argv=None):
    parser = argparse.ArgumentParser(description="ClassCode")
    parser.add_argument("--url", type=str, default=word_list.WORD_LIST_URL, help="URL of the newline separated forbidden word list")
    parser.add_argument("--words-file", type=str, default=None, help="Read forbidden words from a local file instead of the URL")
    parser.add_argument("--no-fetch", action="store_true", help="Generate codes without any forbidden words")
    parser.add_argument("--count", type=int, default=1, help="Number of codes to generate (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random generator for repeatable codes")
    parser.add_argument("--timeout", type=float, default=word_list.FETCH_TIMEOUT, help="Timeout in seconds for fetching the word list")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-codes", action="store_true", help="Save the generated codes to a dated JSON file in logs/")
    args = parser.parse_args(argv)

    if args.count < 1:
        parser.error("--count must be at least 1")

    utils.start_time = time.time()
    utils.VERBOSE = args.verbose
    word_list.FETCH_TIMEOUT = args.timeout

    if args.seed is not None:
        random.seed(args.seed)

    try:
        forbidden_words, source = load_forbidden_words(args)
    except WordListError as e:
        log_with_time(str(e), color=Fore.RED)
        return 1
    except OSError as e:
        log_with_time(f"Could not read word file: {e}", color=Fore.RED)
        return 1

    t0 = time.time()
    try:
        code_gen = ClassCode(forbidden_words)
        codes = [code_gen.get_code()]
        for _ in range(args.count - 1):
            codes.append(code_gen.new_code())
    except PatternError as e:
        log_with_time(str(e), color=Fore.RED)
        return 1
    vlog(f"Generated {len(codes)} code(s), {len(code_gen.learned_patterns)} dead prefixes learned", t0)

    print_codes(codes)

    if args.log_codes:
        utils.log_codes_to_file(codes, source)

    return 0
