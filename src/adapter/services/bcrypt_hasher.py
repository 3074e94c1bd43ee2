import bcrypt

from src.app.services.password_hasher import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt implementation; every hash() call draws a new salt"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        digest = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return digest.decode("utf-8")

    def compare(self, plain: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False
