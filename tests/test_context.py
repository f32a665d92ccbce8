from proplogic.context import Assumption, ProofContext
from proplogic.formula import Atom, And

A, B = Atom('A'), Atom('B')


class Tests:

  def test_push_forks(self):
    outer = ProofContext()
    inner = outer.push(A, 1)
    sibling = outer.push(B, 2)
    assert len(outer) == 0
    assert list(inner) == [Assumption(A, 1)]
    assert list(sibling) == [Assumption(B, 2)]

  def test_lookup_prefers_most_recent(self):
    context = ProofContext().push(A, 1).push(B, 2).push(A, 3)
    assert context.lookup(A) == Assumption(A, 3)
    assert context.lookup(B) == Assumption(B, 2)
    assert context.lookup(And(A, B)) is None

  def test_get_by_number(self):
    context = ProofContext().push(A, 1).push(B, 2)
    assert context.get(2) == Assumption(B, 2)
    assert context.get(3) is None

  def test_formulas_and_numbers(self):
    context = ProofContext().push(A, 4).push(B, 2).push(A, 5)
    assert context.formulas == frozenset([A, B])
    assert context.max_number == 5
    assert ProofContext().max_number == 0
