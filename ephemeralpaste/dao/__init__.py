from ephemeralpaste.dao.base import PasteBaseDAO, PasteMutator
from ephemeralpaste.dao.memory import PasteMemoryDAO
from ephemeralpaste.dao.redis import PasteRedisDAO
from ephemeralpaste.dao.factory import build_paste_dao


__all__ = [
    'PasteBaseDAO',
    'PasteMutator',
    'PasteMemoryDAO',
    'PasteRedisDAO',
    'build_paste_dao',
]
