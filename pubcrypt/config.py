import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

KEY_BITS = int(os.getenv("PUBCRYPT_KEY_BITS", "1024"))
PUBLIC_EXPONENT = int(os.getenv("PUBCRYPT_PUBLIC_EXPONENT", "65537"))
PRIME_ROUNDS = int(os.getenv("PUBCRYPT_PRIME_ROUNDS", "40"))
MAX_PRIME_ATTEMPTS = int(os.getenv("PUBCRYPT_MAX_PRIME_ATTEMPTS", "100000"))

PUB_PATH = os.getenv("PUBCRYPT_PUB_PATH", "pub.key")
PRIV_PATH = os.getenv("PUBCRYPT_PRIV_PATH", "priv.key")

LOG_DIR = Path(os.getenv("PUBCRYPT_LOG_DIR", str(Path.home() / ".pubcrypt" / "logs")))
AUDIT_ENABLED = os.getenv("PUBCRYPT_AUDIT", "1") not in ("0", "false", "no", "")

# smallest modulus generate_keypair() accepts
MIN_KEY_BITS = 512
