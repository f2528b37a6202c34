from passlib.context import CryptContext

# Password hashing for admin accounts (Argon2)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password, hashed_password):
    """Checks if the typed password matches the saved hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    """Hashes a plain password with Argon2 before it is saved."""
    return pwd_context.hash(password)
