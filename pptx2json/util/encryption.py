import io

import olefile

# Streams written by Office when a package is protected with a password.
# The encrypted OOXML package itself lives in "EncryptedPackage".
_ENCRYPTION_STREAMS = ("EncryptionInfo", "EncryptedPackage")


def is_pptx_encrypted(file_like: io.BytesIO) -> bool:
    """
    Return True if the file is an encrypted presentation.

    A password-protected .pptx is not a ZIP archive but an OLE compound file
    wrapping the encrypted package.
    """
    file_like.seek(0)
    if not olefile.isOleFile(file_like):
        file_like.seek(0)
        return False

    file_like.seek(0)
    with olefile.OleFileIO(file_like) as ole:
        encrypted = any(ole.exists(stream) for stream in _ENCRYPTION_STREAMS)
    file_like.seek(0)
    return encrypted
