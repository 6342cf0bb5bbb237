# redstore

In-memory data structures of the kind a key-value store is built on. Everything is
pure Python with no runtime dependencies.

## What is inside

| Module | Contents |
| --- | --- |
| `redstore.lock` | `RWLock`, a reader-writer lock; `Locks`, a fixed table of `RWLock`s picked by the `fnv32` hash of a key |
| `redstore.dicts` | the `Dict` interface, `SimpleDict` (no locking), `ConcurrentDict` (sharded, thread-safe) and `compute_capacity` |
| `redstore.linkedlist` | `LinkedList`, a doubly linked list |
| `redstore.quicklist` | `QuickList`, a list stored as pages of up to `PAGE_SIZE` (1024) values |
| `redstore.bitmap` | `BitMap`, a growable bit array over a `bytearray` |
| `redstore.hashset` | `HashSet` of strings, plus `intersect`, `union` and `diff` |
| `redstore.border` | `ScoreBorder`, `Infinity` and `parse_score_border` for bounds such as `2`, `(2`, `-inf`, `+inf` |
| `redstore.skiplist` | `Skiplist` of `Element` (member, score) pairs ordered by score, then member; `random_level` |
| `redstore.sortedset` | `SortedSet`, which pairs a dict with a skiplist |

## Installing

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Examples

Sorted set with ranks and score ranges:

```python
from redstore.sortedset import SortedSet
from redstore.border import parse_score_border

zs = SortedSet()
for name, score in [("s1", 1), ("s2", 2), ("s3", 3), ("s4", 4)]:
    zs.add(name, score)

zs.get_rank("s3", False)                 # 2 (ranks start at 0)
low = parse_score_border("(1")           # exclusive lower bound
high = parse_score_border("+inf")
[e.member for e in zs.range_by_score(low, high, 0, -1, False)]  # ['s2', 's3', 's4']
[e.member for e in zs.pop_min(2)]        # ['s1', 's2']
len(zs)                                  # 2
```

`parse_score_border` raises `ValueError("ERR min or max is not a float")` for text it
cannot read. In `range_by_score`, a negative `limit` means no limit, and a `limit` of 0
or a negative `offset` gives an empty list.

Sharded dict with grouped locking. The `put` family and `remove` return how many
entries they inserted, updated or deleted (0 or 1); `get` returns `(value, exists)`:

```python
from redstore.dicts import ConcurrentDict

d = ConcurrentDict(16)
d.put("k1", 1)               # 1: a new key was inserted
d.put_if_absent("k1", 2)     # 0: the key is already there
d.get("k1")                  # (1, True)
d.rw_locks(["k1"], ["k2"])
try:
    d.put_with_lock("k1", 3)  # the *_with_lock methods rely on rw_locks
finally:
    d.rw_unlocks(["k1"], ["k2"])
```

`Locks.locks`, `rlocks` and `rw_locks` take their locks in ascending table order, so
callers that lock several keys at once do not deadlock one another.

Bitmap (bits are stored least-significant bit first in each byte; reading past the end
gives 0):

```python
from redstore.bitmap import BitMap

bm = BitMap.from_bytes(b"\xff\xff")
bm.set_bit(8, 0)
bm.to_bytes()                # b'\xff\xfe'
bm.get_bit(100)              # 0
```

Lists take a predicate when removing by value:

```python
from redstore.quicklist import QuickList

ql = QuickList()
for i in range(10):
    ql.add(i)
ql.remove_by_val(lambda v: v % 2 == 0, 2)   # 2: removes 0 and 2
ql.range(0, 3)                              # [1, 3, 4]
```

`LinkedList` and `QuickList` raise `IndexError` for indexes out of bounds; their
`remove_last` returns `None` on an empty list.

## What it does not do

This package holds only the data structures. It has no network server, no command
parser or wire protocol, no key expiry, no transactions and no persistence to disk; a
store built on it has to supply those itself.