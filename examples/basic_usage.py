"""
Basic usage example for proximitysweep.
"""

import sys
sys.path.insert(0, "..")

from proximitysweep import TermFrequencyList, UnorderedEvaluator, parse_within

# ---------------------------------------------------------------------------
# 1. Evaluate raw offset lists
# ---------------------------------------------------------------------------

# "the quick brown fox": quick=1, brown=2, fox=3
terms = ["quick", "brown", "fox"]
offsets = [[1], [2], [3]]

for distance in [1, 2, 3]:
    ev = UnorderedEvaluator({"body"}, distance, {}, terms)
    mark = "✓" if ev.evaluate(offsets) else "✗"
    print(f"  within({distance}, quick, brown, fox)  {mark}")

print()
print("Note: three terms can never span less than 2 positions.")
print()

# ---------------------------------------------------------------------------
# 2. Evaluate a document through its term frequency lists
# ---------------------------------------------------------------------------

text = {
    "title": "fox news tonight",
    "body": "the quick brown fox jumps over the lazy dog while the fox sleeps",
}

doc = {}
for field, value in text.items():
    for pos, word in enumerate(value.split()):
        doc.setdefault(word, {}).setdefault(field, []).append(pos)
doc = {term: TermFrequencyList.from_positions(p) for term, p in doc.items()}

queries = [
    "content:within(body, 3, termOffsetMap, 'lazy', 'fox')",
    "content:within(body, 2, termOffsetMap, 'lazy', 'quick')",
    "within(1, 'fox', 'news')",
    "within(5, 'fox', 'fox')",
    "within(2, 'fox', 'fox')",
]

print("Document queries:")
for q in queries:
    predicate = parse_within(q)
    ev = predicate.evaluator(doc, default_fields=text)
    mark = "✓" if ev.evaluate_fields() else "✗"
    print(f"  {mark}  {q}")

print()
print("Note: a repeated term needs two different occurrences of 'fox'.")
