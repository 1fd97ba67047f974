"""Domain layer for postledger.

Services are resolved lazily so that ``postledger.database`` can import the
entity module without pulling in the services that depend on it.
"""

_SERVICES = {
    "AccountService": "postledger.domain.account",
    "PostService": "postledger.domain.post",
    "PostLinker": "postledger.domain.linker",
    "TransactionService": "postledger.domain.transaction",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
