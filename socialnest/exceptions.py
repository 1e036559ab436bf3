"""
SocialNest: domain-specific HTTP exceptions.

All exceptions use preset status codes, detail messages and a machine-readable
``code`` so that callers never need to specify these at the call site.  The
handlers in ``socialnest.core.middleware.error_handler`` wrap them in the
standard error envelope.
"""
from fastapi import HTTPException, status


# ── Authentication ────────────────────────────────────────────────────────────

class NotAuthenticated(HTTPException):
    code = "not_authenticated"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token.",
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentials(HTTPException):
    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )


class TokenExpired(HTTPException):
    code = "token_expired"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired.",
            headers={"WWW-Authenticate": "Bearer"},
        )


class TokenInvalid(HTTPException):
    code = "token_invalid"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed.",
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountGone(HTTPException):
    """Token is valid but its subject account has been deleted."""

    code = "account_gone"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, user not found.",
            headers={"WWW-Authenticate": "Bearer"},
        )


# ── Ownership ─────────────────────────────────────────────────────────────────

class NotPostOwner(HTTPException):
    code = "not_post_owner"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this post.",
        )


class NotCommentAuthor(HTTPException):
    code = "not_comment_author"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not authorized to modify this comment.",
        )


# ── Not found ─────────────────────────────────────────────────────────────────

class AccountNotFound(HTTPException):
    code = "account_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")


class ProfileNotFound(HTTPException):
    code = "profile_not_found"

    def __init__(self, detail: str = "Profile not found.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class PostNotFound(HTTPException):
    code = "post_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")


class PostsNotFound(HTTPException):
    """The account has no posts; an empty result is reported as 404."""

    code = "posts_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Posts not found.")


class LikedPostsNotFound(HTTPException):
    code = "liked_posts_not_found"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No liked posts found for this user.",
        )


class CommentNotFound(HTTPException):
    code = "comment_not_found"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found.")


# ── Conflicting state ─────────────────────────────────────────────────────────

class EmailAlreadyRegistered(HTTPException):
    code = "email_taken"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists.",
        )


class ProfileAlreadyExists(HTTPException):
    code = "profile_exists"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Profile already exists.")


class DuplicateUsername(HTTPException):
    code = "duplicate_username"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This username is already taken.",
        )


class AlreadyFollowing(HTTPException):
    code = "already_following"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are already following this user.",
        )


class NotFollowing(HTTPException):
    code = "not_following"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are not following this user.",
        )


class AlreadyLiked(HTTPException):
    code = "already_liked"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Post already liked.")


# ── Invalid operation ─────────────────────────────────────────────────────────

class CannotFollowSelf(HTTPException):
    code = "cannot_follow_self"

    def __init__(self, detail: str = "You cannot follow yourself.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ── Uploads / blob store ──────────────────────────────────────────────────────

class NoMediaProvided(HTTPException):
    code = "no_media_provided"

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="No media selected.")


class UnsupportedMediaType(HTTPException):
    code = "unsupported_media_type"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Images only! Allowed types: jpeg, jpg, png.",
        )


class FileTooLarge(HTTPException):
    code = "file_too_large"

    def __init__(self, max_mb: int) -> None:
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"The uploaded file exceeds the maximum allowed size of {max_mb} MB.",
        )


class BlobStoreUnavailable(HTTPException):
    code = "blob_store_unavailable"

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not store the uploaded file. Please try again.",
        )
