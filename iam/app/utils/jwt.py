import time
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from iam.domain import errors
from iam.domain.result import Error

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class TokenError(Exception):
    """Token could not be verified; .error carries the code"""

    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)


class TokenCodec:
    """
    Issues and verifies HMAC-signed session tokens.

    Claims: user_id, sub, iss, iat, nbf, exp. Only tokens whose header names
    an HMAC algorithm, and exactly the configured one, are accepted.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        issuer: str = "iam_service",
        algorithm: str = "HS256",
    ):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm: {algorithm}")
        self.secret = secret
        self.ttl = ttl
        self.issuer = issuer
        self.algorithm = algorithm

    def issue(self, user_id: str, ttl: Optional[timedelta] = None) -> str:
        """
        Generate a signed token for a user

        Args:
            user_id: Subject of the token
            ttl: Override of the configured lifetime (negative values yield an
                already expired token)

        Returns:
            Compact JWT string
        """
        now = datetime.now(UTC)
        user_id = str(user_id)
        payload = {
            "user_id": user_id,
            "sub": user_id,
            "iss": self.issuer,
            "iat": now,
            "nbf": now,
            "exp": now + (self.ttl if ttl is None else ttl),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify signature, algorithm, issuer and validity window

        Returns:
            The user ID carried by the token

        Raises:
            TokenError: TOKEN_MALFORMED, TOKEN_INVALID or TOKEN_EXPIRED
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise TokenError(errors.TOKEN_MALFORMED) from exc

        if header.get("alg") != self.algorithm:
            raise TokenError(errors.TOKEN_INVALID)

        try:
            claims = jwt.decode(
                token, self.secret, algorithms=[self.algorithm], issuer=self.issuer
            )
        except ExpiredSignatureError as exc:
            raise TokenError(errors.TOKEN_EXPIRED) from exc
        except JWTError as exc:
            raise TokenError(errors.TOKEN_INVALID) from exc

        user_id = claims.get("user_id") or claims.get("sub")
        if not user_id:
            raise TokenError(errors.TOKEN_INVALID)
        return user_id

    @staticmethod
    def peek_subject(token: str) -> str:
        """Subject without verification - diagnostics only, never for access control"""
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            return ""
        return str(claims.get("user_id") or claims.get("sub") or "")

    @staticmethod
    def is_expired(token: str) -> bool:
        """Expiry check without verification; unreadable tokens count as expired"""
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            return True

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return True
        return exp < time.time()
