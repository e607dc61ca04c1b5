"""multipart/form-data body builder."""

import mimetypes
import os
import uuid
from typing import Optional

DEFAULT_MAX_FILE_BYTES = 25 * 1024 * 1024

CRLF = "\r\n"


class MultipartData:
    """Accumulates form fields into a multipart/form-data body.

    Each instance draws its own random boundary, so bodies built side by side
    never share one. Field values and file names are written as raw UTF-8 and
    are not escaped.

    Usage:
        form = MultipartData()
        form.add("name", "Alice")
        form.add_file("avatar", "a.png", png_bytes, "image/png")
        resource = Resource(
            "users", User, method=HTTPMethod.POST,
            headers={"Content-Type": form.content_type}, body=form.data,
        )
    """

    def __init__(self):
        self.boundary = uuid.uuid4().hex.upper()
        self._data = bytearray()

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def data(self) -> bytes:
        """The complete body, closed with the terminating boundary marker."""
        return bytes(self._data) + f"--{self.boundary}--".encode("utf-8")

    def _append(self, text: str) -> None:
        self._data += text.encode("utf-8")

    def add(self, key: str, value: str) -> None:
        """Append a text field."""
        self._append(f"--{self.boundary}{CRLF}")
        self._append(f'Content-Disposition: form-data; name="{key}"{CRLF}')
        self._append(CRLF)
        self._append(value + CRLF)

    def add_file(self, key: str, file_name: str, file_data: bytes, mime_type: str) -> None:
        """Append a file field with its raw bytes."""
        self._append(f"--{self.boundary}{CRLF}")
        self._append(f'Content-Disposition: form-data; name="{key}"; filename="{file_name}"{CRLF}')
        self._append(f"Content-Type: {mime_type}{CRLF}{CRLF}")
        self._data += file_data
        self._append(CRLF)

    def add_path(
        self,
        key: str,
        path: str,
        mime_type: Optional[str] = None,
        max_bytes: int = DEFAULT_MAX_FILE_BYTES,
    ) -> None:
        """Read a local file and append it as a file field.

        Args:
            key: The form field name.
            path: Path of the file to read. Its base name is used as the filename.
            mime_type: Content type. Guessed from the file name if omitted.
            max_bytes: Refuse files larger than this.

        Raises:
            ValueError: If the file is larger than max_bytes.
        """
        size = os.stat(path).st_size
        if size > max_bytes:
            raise ValueError(f"file too large for upload: {size} > {max_bytes}")
        with open(path, "rb") as f:
            file_data = f.read()

        file_name = os.path.basename(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        self.add_file(key, file_name, file_data, mime_type)
