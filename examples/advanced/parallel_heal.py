"""Thread safe - heal 1000 stream tails in parallel with one shared cache."""

from concurrent.futures import ThreadPoolExecutor

from remiendo import LRUBlockCache, stabilize

buffers = [f"# Reply {i}\n\nPartial **answer {i} with `code" for i in range(1000)]
cache = LRUBlockCache(maxsize=4096)

with ThreadPoolExecutor(max_workers=8) as ex:
    snapshots = list(ex.map(lambda b: stabilize(b, cache=cache), buffers))

print(f"Stabilized {len(snapshots)} buffers in parallel")
print("Last tail:", snapshots[-1].healed[-1])
