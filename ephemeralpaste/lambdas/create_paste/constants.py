# Log event codes
PASTE_CREATED = 'PASTE_CREATED'
INVALID_INPUT = 'INVALID_INPUT'
BACKEND_UNAVAILABLE = 'BACKEND_UNAVAILABLE'
