"""
Exceptions for the SealDrop codec
Everything derives from SealDropError so callers have one thing to catch
"""


class SealDropError(Exception):
    # general container for errors
    pass


class CapabilityUnavailableError(SealDropError):
    # raised when the AEAD provider cannot be used in this process
    pass


class MetadataTooLargeError(SealDropError):
    # raised when the serialized header does not fit the fixed region
    pass


class TruncatedContainerError(SealDropError):
    # raised when a container is too short to hold a nonce
    pass


class MalformedKeyError(SealDropError):
    # raised when a key string does not decode to a 256-bit key
    pass


class AuthenticationFailedError(SealDropError):
    # raised when the AEAD tag does not verify (wrong key or tampering)
    pass


class MetadataParseError(SealDropError):
    # raised when a decrypted header cannot be parsed; recovered by the codec
    pass
