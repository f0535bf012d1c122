from ephemeralpaste.dao.base.paste_base_dao import PasteBaseDAO, PasteMutator


__all__ = [
    'PasteBaseDAO',
    'PasteMutator',
]
