"""Splitting of strings on a single delimiter character."""

from __future__ import annotations

from collections.abc import Iterator


class _LineStream:
    """Reads delimited pieces of a string the way a text input stream does."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._eof = False
        self._failed = False
        self.token = ""

    def read_until(self, delim: str) -> bool:
        # A stream that has already hit the end refuses to read and leaves
        # the previous token untouched.
        if self._eof or self._failed:
            self._failed = True
            return False
        self.token = ""
        if self._pos >= len(self._text):
            self._eof = True
            self._failed = True
            return False
        end = self._text.find(delim, self._pos)
        if end < 0:
            self.token = self._text[self._pos:]
            self._pos = len(self._text)
            self._eof = True
        else:
            self.token = self._text[self._pos:end]
            self._pos = end + 1
        return True


class Tokenizer:
    """Holds a string and the tokens produced by the last split."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens: list[str] = []

    @property
    def text(self) -> str:
        return self._text

    def tokenize(self, delim: str, max_tokens: int = 0) -> int:
        """Split on ``delim`` and return the number of tokens produced.

        With ``max_tokens`` above zero the last token holds the rest of the
        text up to the next newline. A trailing delimiter yields a final
        empty token.
        """
        if len(delim) != 1:
            raise ValueError("delimiter must be a single character")
        self._tokens = []
        if not self._text:
            return 0

        stream = _LineStream(self._text)
        count = 0
        while True:
            count += 1
            if max_tokens > 0 and count >= max_tokens:
                stream.read_until("\n")
                self._tokens.append(stream.token)
                count += 1
                break
            if stream.read_until(delim):
                self._tokens.append(stream.token)
            else:
                if self._text[-1] == delim:
                    self._tokens.append("")
                    count += 1
                break
        return count - 1

    def __call__(self, delim: str, max_tokens: int = 0) -> int:
        return self.tokenize(delim, max_tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __getitem__(self, index: int) -> str:
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)