from ephemeralpaste.dao.memory.locks import KeyedLock
from ephemeralpaste.dao.memory.paste_memory_dao import PasteMemoryDAO


__all__ = [
    'KeyedLock',
    'PasteMemoryDAO',
]
