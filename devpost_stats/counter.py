# Devpost Stats
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Token frequency counting."""

from collections import Counter
from collections.abc import Iterable


FrequencyTable = dict[str, int]


def count_tokens(tokens: Iterable[str]) -> FrequencyTable:
    """Count how often each token occurs.

    Tokens are compared by exact string equality. Keys keep first-seen order.
    """

    return dict(Counter(tokens))
