import heapq
from itertools import count
from typing import Dict, Optional


class HuffmanError(Exception):
    """Base class for everything the codec raises."""


class EmptyInputError(HuffmanError, ValueError):
    def __init__(self, message="cannot build a Huffman code from empty input"):
        super().__init__(message)


class MissingCodeError(HuffmanError, KeyError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self):
        return f"no Huffman code for byte {self.symbol}"


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency):
        self.symbol = symbol    # byte or None
        self.frequency = frequency
        self.left = None
        self.right = None

    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol={self.symbol}, frequency={self.frequency})"
        return f"HuffmanNode(frequency={self.frequency})"


def frequency_table(data: bytes) -> Dict[int, int]: # byte -> count, in first-seen order
    ft: Dict[int, int] = {}
    for b in data:
        ft[b] = ft.get(b, 0) + 1
    return ft


class MinHeap:
    """
    Min-heap of HuffmanNodes keyed on frequency.

    Equal frequencies come out in insertion order: every entry carries the
    sequence number it was pushed with, so the tree (and therefore every
    container) is reproducible for identical input.
    """

    def __init__(self):
        self._heap = []
        self._order = count()

    def __len__(self):
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def insert(self, node: HuffmanNode) -> None:
        heapq.heappush(self._heap, (node.frequency, next(self._order), node))

    def extract_min(self) -> Optional[HuffmanNode]:
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[HuffmanNode]:
        return self._heap[0][2] if self._heap else None


def build_huffman_tree(frequency_table: Dict[int, int]) -> HuffmanNode: # frequency_table: dict of symbol -> frequency
    if not frequency_table:
        raise EmptyInputError()

    priority_queue = MinHeap()
    for symbol, frequency in frequency_table.items():
        priority_queue.insert(HuffmanNode(symbol, frequency))

    # Build the tree
    while len(priority_queue) > 1:
        left = priority_queue.extract_min()
        right = priority_queue.extract_min()
        merged_node = HuffmanNode(None, left.frequency + right.frequency) # internal node with combined frequency
        merged_node.left = left
        merged_node.right = right
        priority_queue.insert(merged_node)

    return priority_queue.extract_min() # root of the tree


def generate_huffman_codes(root: HuffmanNode) -> Dict[int, str]: # root: root of the Huffman tree
    # A lone leaf has an empty path; give it a one-bit code so it still takes up space in the stream
    if root.is_leaf():
        return {root.symbol: "0"}

    codes = {}
    def generate_codes_helper(node, current_code): # recursive helper, depth is bounded by the 256-symbol alphabet
        if node is None:
            return

        # Leaf node -> assign code
        if node.is_leaf():
            codes[node.symbol] = current_code
            return

        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes


def build_code_table(data: bytes) -> Dict[int, str]:
    """Frequency table -> tree -> codes, with codes ordered like the frequency table."""
    ft = frequency_table(data)
    codes = generate_huffman_codes(build_huffman_tree(ft))
    return {symbol: codes[symbol] for symbol in ft}


def weighted_code_length(frequency_table: Dict[int, int], codes: Dict[int, str]) -> int: # total payload bits before padding
    return sum(frequency * len(codes[symbol]) for symbol, frequency in frequency_table.items())


def is_prefix_free(codes: Dict[int, str]) -> bool:
    # after sorting, a code that prefixes another sorts directly before one of its extensions
    ordered = sorted(codes.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


def build_decoding_tree(codes: Dict[int, str]) -> HuffmanNode:
    """
    Rebuild a tree from a symbol -> code mapping. Frequencies are unknown at
    this point so every node carries 0. Branches no code reaches stay None.
    """
    root = HuffmanNode(None, 0)
    for symbol, code in codes.items():
        node = root
        for bit in code:
            attr = 'left' if bit == '0' else 'right'
            child = getattr(node, attr)
            if child is None:
                child = HuffmanNode(None, 0)
                setattr(node, attr, child)
            node = child
        node.symbol = symbol
    return root
