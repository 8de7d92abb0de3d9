"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Member/Auth
  2xxx: Ledger
  3xxx: Catalog
  4xxx: Exchange
  5xxx: Moderation
  9xxx: System

Kind classes (NotFoundError, UnauthorizedError, ...) group the concrete errors so callers
can branch on the failure kind without matching numeric codes.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- Kinds ---

class NotFoundError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 404)


class UnauthorizedError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 403)


class InvalidTransitionError(AppError):
    def __init__(self, item_id: str, status: str, event: str, code: int = 4001) -> None:
        self.item_id = item_id
        self.status = status
        self.event = event
        super().__init__(code, f"Item {item_id} in status {status} cannot accept {event}", 409)


class NotEligibleError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


# --- 1xxx: Member/Auth ---

class MemberNotFoundError(NotFoundError):
    def __init__(self, member_id: str) -> None:
        super().__init__(1001, f"Member not found: {member_id}")


class MemberExistsError(AppError):
    def __init__(self, member_id: str) -> None:
        super().__init__(1002, f"Member already exists: {member_id}", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid or expired token", 401)


class MemberBannedError(UnauthorizedError):
    def __init__(self, member_id: str) -> None:
        super().__init__(1004, f"Member is banned: {member_id}")


# --- 2xxx: Ledger ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            2001,
            f"Insufficient balance: required {required} points, available {available} points",
            422,
        )


class InvalidAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(2002, f"Amount must be a positive integer, got {amount}", 422)


# --- 3xxx: Catalog ---

class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: str) -> None:
        super().__init__(3001, f"Item not found: {item_id}")


class InvalidListingError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Invalid listing: {detail}", 422)


# --- 4xxx: Exchange ---

class AlreadyExchangedError(InvalidTransitionError):
    def __init__(self, item_id: str, event: str = "redeem") -> None:
        super().__init__(item_id, "EXCHANGED", event, code=4002)
        self.message = f"Item already exchanged: {item_id}"
        self.args = (self.message,)


class OwnItemError(NotEligibleError):
    def __init__(self, item_id: str) -> None:
        super().__init__(4003, f"Owners cannot request or redeem their own item: {item_id}")


class NoListingsError(NotEligibleError):
    def __init__(self, member_id: str) -> None:
        super().__init__(4004, f"Member {member_id} must list an item before requesting a swap")


class NotSwapOwnerError(NotEligibleError):
    def __init__(self, item_id: str) -> None:
        super().__init__(4005, f"Only the owner can accept a swap request on item {item_id}")


# --- 5xxx: Moderation ---

class AdminRequiredError(UnauthorizedError):
    def __init__(self, member_id: str) -> None:
        super().__init__(5001, f"Admin role required: {member_id}")


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
