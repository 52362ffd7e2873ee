class Messages:
    """
    Centralized store for caller-facing reason strings.
    Every rejection path returns exactly one of these.
    """

    OK = "OK"

    SAME_GUEST_SAME_UNIT = "The given guest name cannot book the same unit multiple times"
    GUEST_MULTIPLE_UNITS = "The same guest cannot be in multiple units at the same time"
    UNIT_OCCUPIED = "For the given check-in date, the unit is already occupied"

    BOOKING_NOT_FOUND = "Booking not found"
    BOOKING_ID_REQUIRED = "Booking ID is required"
    STORE_FAILURE = "Booking store failure"
    STAY_OUT_OF_RANGE = "Extended stay ends beyond the supported calendar range"

    @staticmethod
    def missing_field(field: str) -> str:
        return f"Field '{field}' is required"

    @staticmethod
    def positive_integer(field: str) -> str:
        return f"Field '{field}' must be a positive integer"

    @staticmethod
    def nights_range(field: str, limit: int) -> str:
        return f"Field '{field}' must be an integer between 1 and {limit}"

    @staticmethod
    def invalid_date(field: str) -> str:
        return f"Field '{field}' must be a valid calendar date"

    @staticmethod
    def rate_limited(detail: str) -> str:
        return f"Rate limit exceeded: {detail}"


messages = Messages()
