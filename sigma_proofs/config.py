"""
Sigma protocol configuration
Curve selection, transcript domain separation and logging defaults
"""

import os

# Default configuration
DEFAULT_PAIRING_CURVE = os.getenv('SIGMA_PAIRING_CURVE', 'BN254')

# Prover and verifier must agree on both of these, otherwise every
# challenge differs and honest proofs are rejected
DEFAULT_TRANSCRIPT_LABEL = os.getenv('SIGMA_TRANSCRIPT_LABEL', 'sigma-linear-form-opening')
DEFAULT_CHALLENGE_BYTES = int(os.getenv('SIGMA_CHALLENGE_BYTES', 64))

DEFAULT_LOG_LEVEL = os.getenv('SIGMA_LOG_LEVEL', 'WARNING')


class Config:
    """Configuration container"""

    def __init__(self):
        self.pairing_curve = DEFAULT_PAIRING_CURVE
        self.transcript_label = DEFAULT_TRANSCRIPT_LABEL
        self.challenge_bytes = DEFAULT_CHALLENGE_BYTES
        self.log_level = DEFAULT_LOG_LEVEL

    @property
    def transcript_label_bytes(self):
        return self.transcript_label.encode('utf-8')


# Global configuration instance
config = Config()
