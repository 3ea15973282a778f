"""
Client settings
===============

Endpoint and browser-extension identity used by the transport. Settings live
in memory only; session tokens and proxies are per-call arguments instead.
"""

from dataclasses import dataclass


@dataclass
class ClientSettings:
    """Endpoint and browser-extension identity used by the transport."""
    endpoint: str = "https://www2.deepl.com/jsonrpc"
    client_tag: str = "chrome-extension,1.6.0"
    origin: str = "chrome-extension://bppidhpdkcbahckohjehbehjmcnhpkck"
    referer: str = "https://www.deepl.com/"
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
    accept_language: str = "en-US,en;q=0.9"
    timeout: float = 30  # seconds
