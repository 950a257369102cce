import os

# Keep test runs from writing log files into the working directory
os.environ.setdefault("LOG_TO_FILE", "False")
