# Log event codes
PASTE_SERVED = 'PASTE_SERVED'
PASTE_NOT_FOUND = 'PASTE_NOT_FOUND'
BACKEND_UNAVAILABLE = 'BACKEND_UNAVAILABLE'
