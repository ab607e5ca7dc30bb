import logging
import sys
import json
import inspect
import time
import traceback
from functools import wraps

from mini_jira.logs.server_log import log_dir

# ANSI colors for console output
BLUE = '\033[94m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
PURPLE = '\033[95m'
CYAN = '\033[96m'
BOLD = '\033[1m'
END = '\033[0m'

# Headers that must never reach the log files
REDACTED_HEADERS = {"authorization", "cookie"}


def format_object(obj):
    if isinstance(obj, (list, dict, tuple, set)):
        try:
            return json.dumps(obj, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(obj)
    if hasattr(obj, '__dict__'):
        return str({k: v for k, v in vars(obj).items() if not k.startswith('_')})
    return str(obj)


def _safe_headers(headers) -> dict:
    return {
        key: ("***" if key.lower() in REDACTED_HEADERS else value)
        for key, value in dict(headers).items()
    }


class DebugLogger:
    """Verbose logger with caller information, used for request tracing and repository activity"""

    def __init__(self, name="debug", level=logging.DEBUG):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        file_handler = logging.FileHandler(log_dir / "debug.log", encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def debug(self, message, *args, **kwargs):
        """Debug record prefixed with the calling module, line and function"""
        frame = inspect.currentframe().f_back
        filename = frame.f_code.co_filename
        marker = filename.find("mini_jira")
        if marker != -1:
            filename = filename[marker:]

        caller_info = f"{BLUE}[{filename}:{frame.f_lineno} - {frame.f_code.co_name}]{END}"
        self.logger.debug(f"{caller_info} {message}", *args, **kwargs)

    def info(self, message, *args, **kwargs):
        self.logger.info(f"{GREEN}{message}{END}", *args, **kwargs)

    def warning(self, message, *args, **kwargs):
        self.logger.warning(f"{YELLOW}{message}{END}", *args, **kwargs)

    def error(self, message, *args, **kwargs):
        trace = traceback.format_exc()
        if trace and trace != 'NoneType: None\n':
            message = f"{message}\n{RED}Traceback:{END}\n{trace}"
        self.logger.error(f"{RED}{message}{END}", *args, **kwargs)

    def log_exception(self, message="Unhandled exception"):
        exc_type, exc_value, _ = sys.exc_info()
        if exc_type:
            self.error(f"{message}: {exc_type.__name__}: {exc_value}")
        else:
            self.error(message)

    def log_request(self, request, extra_info=None):
        """Log an incoming HTTP request"""
        method = getattr(request, 'method', 'UNKNOWN')
        url = str(getattr(request, 'url', 'UNKNOWN'))
        client = getattr(request, 'client', None)
        client_host = client.host if client else "unknown"
        headers = _safe_headers(getattr(request, 'headers', {}))

        info = (
            f"{CYAN}HTTP request:{END} {method} {url}\n"
            f"{CYAN}Client:{END} {client_host}\n"
            f"{CYAN}Headers:{END} {json.dumps(headers, indent=2, ensure_ascii=False)}"
        )
        if extra_info:
            info += f"\n{CYAN}Extra:{END} {extra_info}"

        self.debug(info)

    def log_response(self, response, process_time=None):
        """Log an outgoing HTTP response"""
        status_code = getattr(response, 'status_code', 0)
        headers = _safe_headers(getattr(response, 'headers', {}))

        color = GREEN if 200 <= status_code < 400 else YELLOW if 400 <= status_code < 500 else RED

        info = (
            f"{CYAN}HTTP response:{END} {color}status {status_code}{END}\n"
            f"{CYAN}Headers:{END} {json.dumps(headers, indent=2, ensure_ascii=False)}"
        )
        if process_time is not None:
            info += f"\n{CYAN}Process time:{END} {process_time:.3f}s"

        self.debug(info)


def log_function(logger=None):
    """Log entry, exit and duration of a coroutine function"""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            active_logger = logger or debug_logger
            params = {k: v for k, v in kwargs.items() if k != "db"}
            active_logger.debug(f"{PURPLE}-> {func.__qualname__}{END} {format_object(params)}")

            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception:
                active_logger.log_exception(f"Error in {func.__qualname__}")
                raise

            elapsed = time.perf_counter() - start_time
            active_logger.debug(f"{PURPLE}<- {func.__qualname__}{END} in {elapsed:.4f}s")
            return result

        return wrapper

    return decorator


debug_logger = DebugLogger()
