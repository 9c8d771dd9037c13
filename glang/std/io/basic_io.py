import os

from glang.errors import GlangIOError
from glang.types import NIL


class BasicIO:
    def read_line(self):
        try:
            return input()
        except EOFError:
            return NIL
        except OSError as e:
            raise GlangIOError(f"error reading standard input: {e.strerror or e}") from e

    def read_file(self, filename: str) -> str:
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise GlangIOError(f"cannot read {filename!r}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise GlangIOError(f"cannot read {filename!r}: not valid UTF-8 text") from e

    def file_exists(self, filename: str) -> bool:
        return os.path.exists(filename)
