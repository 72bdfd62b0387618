#!/usr/bin/env python3
"""
Example 01: Send to a stealth address and find it again.

Generates recipient keys for variant V2, derives one output (ephemeral point R,
Ethereum address and a 1-byte view tag) and scans it back with the private keys.
No network access required.

Usage:
    python examples/01_send_and_scan.py
"""

from ecpdksap import Group, RecipientKeys, Scanner, send

# Recipient: spend key on secp256k1, view key on BN254 G1
keys = RecipientKeys.generate(Group.SECP256K1)
public = keys.public.to_hex()
print("=== Recipient public keys ===")
print(f"K: {public['K'][:32]}...")
print(f"V: {public['V'][:32]}...")

# Sender: only needs K and V
out = send(keys.public, "v2", "v0-1byte")
print("\n=== Published output ===")
print(f"R:        {out.ephemeral[:32]}...")
print(f"view tag: {out.view_tag}")
print(f"address:  {out.identifier.address}")

# Recipient: scan the published R / tag pairs
result = Scanner(keys, "v2", "v0-1byte").scan([out.to_candidate()])
print("\n=== Scan ===")
for match in result.matches:
    print(f"address:     {match.identifier.address}")
    print(f"private key: {match.identifier.private_key[:16]}... (keep secret)")
