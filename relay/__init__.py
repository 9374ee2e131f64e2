"""Relay Gateway

An OpenAI-compatible chat-completions gateway that rotates requests across
several upstream providers and fails over between them.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("relay-gateway")
except PackageNotFoundError:
    __version__ = "0.1.0"
