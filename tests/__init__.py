# SPDX-License-Identifier: Apache-2.0
"""
kernel-wire tests

Validator behavior for kernel messages and notebook server records, plus the
JSON Schema export and the command-line entrypoint.
"""
