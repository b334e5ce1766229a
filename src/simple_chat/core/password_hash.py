import hashlib


class PasswordHash:
    """
    Unsalted SHA-256 password digests.

    Demo-grade: there is no salt and no key stretching, and verification is
    plain equality between a stored digest and a freshly computed one.
    """
    algorithm = "sha256"

    def hash(self, password: str) -> str:
        """
        Hex digest of the UTF-8 encoded password. Lone surrogates are encoded
        as-is, so every str has a digest.
        :param password:
        :return: 64 lower-case hex characters
        """
        return hashlib.new(self.algorithm, password.encode("utf-8", errors="surrogatepass")).hexdigest()
