from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from libs.result import Error, Result, Return
from src.app.services.token_signer import TokenSigner


class JoseTokenSigner(TokenSigner):
    """HS256 JWT signer backed by python-jose"""

    algorithm = "HS256"

    def sign(self, payload: dict, expires_in: timedelta, secret: str) -> str:
        """
        Sign a JWT carrying payload plus iat/exp claims.

        Args:
            payload: Claims to embed (must be JSON serializable)
            expires_in: Lifetime of the token
            secret: Symmetric signing key

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        claims = {**payload, "iat": now, "exp": now + expires_in}
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def verify(self, token: str, secret: str) -> Result[dict]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
        except JWTError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))
        return Return.ok(payload)
