''' author: samtenka
    change: 2020-04-02
    create: 2019-03-23
    descrp: small keyed containers used by the grammar model
    to use: from containers import ListByKey
'''

class ListByKey:
    '''
        Maintain a key->[val] map with easy adding and lookup.  Keys are
        reported in order of first insertion.
    '''

    def __init__(self):
        self.data = {}

    def add(self, key, val):
        if key not in self.data:
            self.data[key] = []
        self.data[key].append(val)

    def keys(self):
        return self.data.keys()

    def at(self, key):
        return tuple(self.data.get(key, ()))

    def len_at(self, key):
        return len(self.data.get(key, ()))

    def __contains__(self, key):
        return key in self.data
