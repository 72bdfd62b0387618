#!/usr/bin/env python3
"""
Example 02: How much work a view tag saves.

Publishes a batch of V1 outputs for a stranger plus a few for our recipient,
then scans the batch with no tag, a 1-byte tag and a 2-byte tag and prints
the recovery counts and timings.

Usage:
    python examples/02_view_tag_filtering.py [batch_size]
"""

import logging
import sys

from ecpdksap import Group, RecipientKeys, ScanCandidate, Scanner, send

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

size = int(sys.argv[1]) if len(sys.argv) > 1 else 200

me = RecipientKeys.generate(Group.G1)
stranger = RecipientKeys.generate(Group.G1)

outputs = [send(stranger.public, "v1", "v0-2bytes") for _ in range(size)]
for i in (size // 4, size // 2, size - 1):
    outputs[i] = send(me.public, "v1", "v0-2bytes")

batches = {
    "none": [ScanCandidate(ephemeral=o.ephemeral) for o in outputs],
    # the 1-byte hash tag is the first byte of the 2-byte one
    "v0-1byte": [ScanCandidate(ephemeral=o.ephemeral, view_tag=o.view_tag[:2]) for o in outputs],
    "v0-2bytes": [o.to_candidate() for o in outputs],
}

print(f"\n{'scheme':<10} {'recovered':>9} {'filtered':>9} {'filter ms':>10} {'recover ms':>11}")
for scheme, batch in batches.items():
    result = Scanner(me, "v1", scheme).scan(batch)
    s = result.stats
    print(f"{scheme:<10} {s.recoveries:>9} {s.filtered_out:>9} {s.avg_filter_ms:>10.3f} {s.avg_recovery_ms:>11.3f}")
