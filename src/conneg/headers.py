from collections.abc import MutableMapping

__all__ = ["ResponseHeaders"]


class ResponseHeaders(MutableMapping):
    """
    A view on a list of ``(name, value)`` header tuples.  Keys are
    normalized for case and whitespace; setting a key replaces every
    header of that name.
    """

    def __init__(self, headerlist=None):
        if headerlist is None:
            headerlist = []
        self._items = headerlist

    @staticmethod
    def normalize(key):
        return str(key).lower().strip()

    def __getitem__(self, key):
        key = self.normalize(key)
        for k, v in reversed(self._items):
            if self.normalize(k) == key:
                return v
        raise KeyError(key)

    def __setitem__(self, key, value):
        normalized = self.normalize(key)
        self._items[:] = [
            (k, v) for k, v in self._items if self.normalize(k) != normalized
        ]
        self._items.append((key, value))

    def __delitem__(self, key):
        key = self.normalize(key)
        items = self._items
        found = False
        for i in range(len(items) - 1, -1, -1):
            if self.normalize(items[i][0]) == key:
                del items[i]
                found = True
        if not found:
            raise KeyError(key)

    def __contains__(self, key):
        key = self.normalize(key)
        for k, v in self._items:
            if self.normalize(k) == key:
                return True
        return False

    def __iter__(self):
        seen = set()
        for k, v in self._items:
            if self.normalize(k) not in seen:
                seen.add(self.normalize(k))
                yield k

    def __len__(self):
        return len({self.normalize(k) for k, v in self._items})

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self._items)
