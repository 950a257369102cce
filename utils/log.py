import colorama
import inspect
import os
from datetime import datetime
from enum import Enum

from env import LOG_DIR, LOG_TO_FILE

# Initialize colorama
colorama.init()


class LogLevel(Enum):
    INFO = '\033[92m'  # Green
    WARNING = '\033[93m'  # Yellow
    ERROR = '\033[91m'  # Red
    DEBUG = '\033[94m'  # Blue


def log(scope: str, message: str, level: LogLevel = LogLevel.INFO):
    """Colored log output function, including calling function name and line number, with persistence to file"""
    # Get call stack information
    caller_frame = inspect.currentframe().f_back
    if caller_frame:
        caller_info = inspect.getframeinfo(caller_frame)
        # Only take filename, not full path
        filename = os.path.basename(caller_info.filename)
        caller_info_str = f"[{filename}:{caller_info.function}:{caller_info.lineno}]"
    else:
        caller_info_str = "[unknown]"

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_message = f"{timestamp} {level.name} {caller_info_str} {message}"

    # Console output (with color)
    print(f"{scope}:{level.value}{caller_info_str} {message}{colorama.Style.RESET_ALL}")

    if not LOG_TO_FILE:
        return

    # Persist to file, one file per scope
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        log_file_path = os.path.join(LOG_DIR, f"{scope}.log")
        with open(log_file_path, "a", encoding="utf-8") as f:
            f.write(log_message + "\n")
    except OSError as e:
        # If file writing fails, the console line above is still there
        print(f"{colorama.Fore.RED}[LOG_ERROR] Failed to write to log file: {e}{colorama.Style.RESET_ALL}")
