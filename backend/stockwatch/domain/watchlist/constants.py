ERROR_MISSING_REQUIRED_FIELDS = "Missing required fields"
ERROR_USER_NOT_FOUND = "User not found"
ERROR_ALREADY_IN_WATCHLIST = "Stock already in watchlist"
ERROR_ADD_FAILED = "Failed to add to watchlist"
ERROR_REMOVE_FAILED = "Failed to remove from watchlist"

CODE_MISSING_REQUIRED_FIELDS = "WATCHLIST_MISSING_REQUIRED_FIELDS"
CODE_USER_NOT_FOUND = "WATCHLIST_USER_NOT_FOUND"
CODE_DUPLICATE_SYMBOL = "WATCHLIST_DUPLICATE_SYMBOL"
CODE_STORE_UNAVAILABLE = "WATCHLIST_STORE_UNAVAILABLE"

ACTION_ADDED = "added"
ACTION_REMOVED = "removed"
