class ParseError(Exception):
    """
    Raised when the grammar fails to reduce its input.  Malformed markdown
    never causes this; it indicates a defect in the grammar itself.
    """
    pass


class NestingError(ParseError):
    """
    Raised when the input nests block structures deeper than the
    interpreter stack allows.
    """
    pass


class UnknownWriterError(ValueError):
    """ Raised when an output format name does not resolve to a writer.
    """
    pass
