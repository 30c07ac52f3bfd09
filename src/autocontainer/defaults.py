from autocontainer.lock_mode import LockMode

DEFAULT_LOCK_MODE = LockMode.THREAD

TOKEN_SUFFIX_SEPARATOR = "@"
