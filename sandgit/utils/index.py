# What it does: Holds the staging area (the index) of a sandbox repository
# How it does: Keeps one blob hash per staged path, sorted on read, so every command sees and rewrites the same {path: hash} mapping
# What data structure it uses: Dictionary (mapping file paths to blob hashes)


class Index:

    def __init__(self, entries=None):
        self._entries = dict(entries or {})

    def __contains__(self, path):
        return path in self._entries

    def __len__(self):
        return len(self._entries)

    def read_index(self): # Returns a copy of the index as {path: hash}, sorted by path
        return {path: self._entries[path] for path in sorted(self._entries)}

    def write_index(self, index_dict): # Replaces the whole index
        self._entries = dict(index_dict)

    def get(self, path):
        return self._entries.get(path)

    def paths(self):
        return sorted(self._entries)

    def update_index_entry(self, path, hash_val):
        self._entries[path] = hash_val

    def remove_index_entry(self, path):
        self._entries.pop(path, None)
