class LrcshiftError(RuntimeError):
    pass


class LrcFileNotFound(LrcshiftError):
    pass


class EncodingNotSupported(LrcshiftError):
    pass


class OutputWriteError(LrcshiftError):
    pass


class AudioFormatError(LrcshiftError):
    pass
