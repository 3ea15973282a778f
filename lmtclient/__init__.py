"""
lmt-client - web translator JSON-RPC client
===========================================

Translates text through the browser-extension JSON-RPC endpoint of a web
translation service:

- ``LMT_split_text`` segmentation followed by ``LMT_handle_jobs`` translation
- request id / timestamp fingerprint accepted by the server
- byte-exact request bodies
- primary translation plus ranked alternatives from the returned beams

License: MIT
"""

__version__ = "1.0.0"

from .core import LMTTranslator, TranslationResult, translate

__all__ = ['LMTTranslator', 'TranslationResult', 'translate', '__version__']
