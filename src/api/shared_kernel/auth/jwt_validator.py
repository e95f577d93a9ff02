"""Bearer token validation for tokens issued by the identity provider.

The identity provider signs access tokens with a shared HS256 secret, so
verification is local and needs no network round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from shared_kernel.errors import Unauthenticated

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims."""

    sub: str
    email: str | None


class InvalidTokenError(Unauthenticated):
    """Raised when JWT validation fails."""

    pass


class JWTValidator:
    """Validates HS256 JWTs against the identity provider's signing secret.

    Checks signature, expiry, audience and (when configured) issuer. With
    no secret configured every token is rejected.
    """

    ALGORITHMS = ["HS256"]

    def __init__(
        self,
        secret: str,
        audience: str,
        probe: JWTValidatorProbe,
        issuer: str | None = None,
        user_id_claim: str = "sub",
        email_claim: str = "email",
    ):
        """Initialize the JWT validator.

        Args:
            secret: HS256 signing secret shared with the identity provider.
            audience: Expected audience claim value.
            probe: Observability probe for logging events.
            issuer: Expected issuer claim; not verified when None.
            user_id_claim: JWT claim to use for the principal ID (default: sub).
            email_claim: JWT claim to use for the principal email.
        """
        self._secret = secret
        self._audience = audience
        self._issuer = issuer
        self._probe = probe
        self._user_id_claim = user_id_claim
        self._email_claim = email_claim

    def validate_token(self, token: str) -> TokenClaims:
        """Validate a JWT and return its claims.

        Raises:
            InvalidTokenError: If the token is malformed, expired, or fails
                verification.
        """
        # Reject malformed tokens before doing any cryptography
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._probe.token_validation_failed(reason=f"Malformed token: {e}")
            raise InvalidTokenError(f"Invalid token format: {e}") from e

        if not unverified_header:
            self._probe.token_validation_failed(reason="Missing token header")
            raise InvalidTokenError("Invalid token: missing header")

        # An empty HMAC key would accept tokens anyone can sign
        if not self._secret:
            self._probe.token_validation_failed(reason="No signing secret configured")
            raise InvalidTokenError("Token verification is not configured")

        try:
            claims = jwt.decode(
                token=token,
                key=self._secret,
                algorithms=self.ALGORITHMS,
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_iss": self._issuer is not None,
                    "verify_exp": True,
                    "require_exp": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_validation_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            error_msg = str(e).lower()
            if "audience" in error_msg:
                self._probe.token_validation_failed(reason="Invalid audience")
                raise InvalidTokenError("Invalid audience claim") from e
            if "issuer" in error_msg:
                self._probe.token_validation_failed(reason="Invalid issuer")
                raise InvalidTokenError("Invalid issuer claim") from e
            self._probe.token_validation_failed(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            error_msg = str(e).lower()
            if "signature" in error_msg:
                self._probe.token_validation_failed(reason="Invalid signature")
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.token_validation_failed(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        user_id = claims.get(self._user_id_claim)
        if not user_id:
            self._probe.token_validation_failed(
                reason=f"Missing {self._user_id_claim} claim"
            )
            raise InvalidTokenError(f"Missing required claim: {self._user_id_claim}")

        email = claims.get(self._email_claim)

        self._probe.token_validated(user_id=str(user_id))

        return TokenClaims(
            sub=str(user_id),
            email=str(email) if email is not None else None,
        )
