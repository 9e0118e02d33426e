"""
KEYLEDGER Configuration
Constants shared by the wallet, transaction and authorizer modules.
"""

import os

# ============================================================================
# FEES
# ============================================================================

# Fixed proportional surcharge applied to every transfer (1%)
FEE_RATE = 0.01

# ============================================================================
# KEYS & ADDRESSES
# ============================================================================

# secp256k1 private scalar size
SECRET_KEY_BYTES = 32

# Compressed SEC1 public key: 02/03 prefix + 32-byte x coordinate
ADDRESS_BYTES = 33

# Addresses are hex of the compressed public key
ADDRESS_LENGTH = ADDRESS_BYTES * 2

# Entropy reads allowed while rejection-sampling one private scalar
MAX_ENTROPY_READS = 64

# SHA-256 digest size, the only message representative the signer accepts
DIGEST_BYTES = 32

# ============================================================================
# TRANSACTIONS
# ============================================================================

# Leading byte of the canonical transaction serialization
TX_FORMAT_VERSION = 1

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = os.environ.get('KEYLEDGER_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'

