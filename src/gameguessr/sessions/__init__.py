from gameguessr.sessions.cache import SessionCache
from gameguessr.sessions.codec import decode, encode
from gameguessr.sessions.store import SESSIONS_COLLECTION, SessionStore

__all__ = ["SessionCache", "SessionStore", "SESSIONS_COLLECTION", "decode", "encode"]
