class TierboardError(Exception):
    """Base exception for all bot errors."""
    def __init__(self, message: str = "An unexpected error occurred."):
        # This is the ultimate base exception, there is no prefix to add.
        self.message = message
        super().__init__(self.message)

class MojangAPIError(TierboardError):
    """Base exception for all Mojang API related errors."""
    def __init__(self, detail: str = "The Mojang API was unresponsive."):
        prefix = "📡 **Mojang API Issue:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class UserNotFoundError(MojangAPIError):
    """Raised when a Minecraft username is not recognized by Mojang."""
    def __init__(self, detail: str = "Player not found."):
        prefix = "🔍 **Search Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class RateLimitError(MojangAPIError):
    """Raised when a rate limit was hit by an API call."""
    def __init__(self, detail: str = "API rate limit hit."):
        self.message = detail
        super().__init__(self.message)

class ServiceUnavailableError(MojangAPIError):
    """Raised when the API is temporarily down."""
    def __init__(self, detail: str = "Service temporarily unavailable."):
        self.message = detail
        super().__init__(self.message)

class DatabaseError(TierboardError):
    """Base exception for all database related errors."""
    def __init__(self, detail: str = "Failed to update database records."):
        prefix = "💾 **Database Error:**"
        self.message = f"{prefix} {detail}"
        super().__init__(self.message)

class PlayerNotFoundError(DatabaseError):
    """Raised when a player is not on the tier list."""
    def __init__(self, detail: str = "Player is not on the tier list."):
        self.message = detail
        super().__init__(self.message)

class DuplicatePlayerError(DatabaseError):
    """Raised when adding a player whose UUID is already on the tier list."""
    def __init__(self, detail: str = "Player is already on the tier list."):
        self.message = detail
        super().__init__(self.message)
