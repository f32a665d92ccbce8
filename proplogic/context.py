from typing import *

from proplogic.formula import Formula
from proplogic.util import find


class Assumption:
  """
  A formula taken as given, tagged with the reference number
  that leaves use to point back at it.
  """

  __slots__ = ('formula', 'number')

  def __init__(self, formula: Formula, number: int):
    self.formula = formula
    self.number = number

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.formula == other.formula
      and self.number == other.number)

  def __hash__(self):
    return hash((self.formula, self.number))

  def __repr__(self):
    return f'<Assumption {self.number}: {self.formula}>'


class ProofContext:

  """

  The assumptions that are live at some point of a derivation,
  in the order they were made.

  A ProofContext is never changed in place. `push` returns a new
  context, so a branch of the search that assumes something does
  not leak that assumption into its siblings:

    >>> outer = ProofContext()
    >>> inner = outer.push(parse('A'), 1)
    >>> len(outer), len(inner)
    (0, 1)

  """

  __slots__ = ('assumptions',)

  def __init__(self, assumptions: Iterable[Assumption] = ()):
    self.assumptions = tuple(assumptions)

  def push(self, formula: Formula, number: int) -> 'ProofContext':
    return ProofContext(self.assumptions + (Assumption(formula, number),))

  def lookup(self, formula: Formula) -> Optional[Assumption]:
    """
    Find the most recently made assumption of `formula`, if any
    """
    return find(lambda assumption: assumption.formula == formula, reversed(self.assumptions))

  def get(self, number: int) -> Optional[Assumption]:
    """
    Find the live assumption with reference number `number`, if any
    """
    return find(lambda assumption: assumption.number == number, self.assumptions)

  @property
  def formulas(self) -> FrozenSet[Formula]:
    return frozenset(assumption.formula for assumption in self.assumptions)

  @property
  def max_number(self) -> int:
    return max((assumption.number for assumption in self.assumptions), default=0)

  def __iter__(self):
    return iter(self.assumptions)

  def __len__(self):
    return len(self.assumptions)

  def __repr__(self):
    return f'ProofContext({list(self.assumptions)!r})'
