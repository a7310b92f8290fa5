"""
Link reference definitions: the per-conversion table and the prescan pass
that fills it before the main parse begins.

"""

import logging
from collections import namedtuple

from .scanner import Scanner
from .text import normalize_reference, reBlankLines, reNonEmptyLines

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


Reference = namedtuple('Reference', 'label url title')


class ReferenceTable(object):
    """
    Mapping of normalized reference label to Reference.  One table is
    built per conversion; a later definition of the same label replaces
    the earlier one.

    """

    def __init__(self):
        super(ReferenceTable, self).__init__()
        self._refs = {}

    def register(self, label, url, title=''):
        key = normalize_reference(label)
        if key in self._refs:
            logger.debug('Reference [%s] redefined', label)
        self._refs[key] = Reference(label, url, title)

    def lookup(self, label):
        return self._refs.get(normalize_reference(label))

    def __contains__(self, label):
        return normalize_reference(label) in self._refs

    def __len__(self):
        return len(self._refs)

    def __iter__(self):
        return iter(self._refs.values())


class ReferenceParser(Scanner):
    """
    Scans normalized text top to bottom, registering every reference
    definition found at the start of a block and skipping everything else.

    """

    def __init__(self, refmap):
        super(ReferenceParser, self).__init__()
        self.refmap = refmap

    def parse(self, s):
        self.subject = s
        self.pos = 0
        while not self.at_end():
            ref = self.parse_reference_definition()
            if ref is not None:
                self.refmap.register(*ref)
            elif not (self.match(reNonEmptyLines) or self.match(reBlankLines)):
                # Only reachable on input not produced by expand_tabs.
                break
        logger.debug('Prescan found %d references', len(self.refmap))
        return self.refmap
