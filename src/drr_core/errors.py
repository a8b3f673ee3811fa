ERRORS = {
  "E_DRR": "Rowid tool error",
  "E_INVALID_LENGTH": "Rowid input has the wrong length",
  "E_INVALID_ALPHABET": "Character outside the rowid alphabet",
  "E_MALFORMED_RECORD": "Malformed rowid record",
  "E_SOURCE_READ": "Blob source could not be read",
}


class DrrError(Exception):
    code = "E_DRR"

    def __init__(self, detail: str = ""):
        self.detail = detail
        msg = ERRORS[self.code]
        super().__init__(f"{msg}: {detail}" if detail else msg)


class InvalidLength(DrrError, ValueError):
    code = "E_INVALID_LENGTH"


class InvalidAlphabetCharacter(DrrError, ValueError):
    code = "E_INVALID_ALPHABET"


class MalformedRecord(DrrError, ValueError):
    code = "E_MALFORMED_RECORD"


class SourceReadFailure(DrrError):
    code = "E_SOURCE_READ"
