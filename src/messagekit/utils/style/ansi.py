"""ANSI escape codes for coloured terminal output."""

reset = "\033[0m"

green = "\033[32m"
yellow = "\033[33m"
cyan = "\033[36m"
grey = "\033[90m"
