# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""CLI command modules.

Each module exposes ``register(program)`` to add its subcommand definitions
to a :class:`subcmd.Program`.
"""
