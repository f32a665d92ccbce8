"""
Classical truth-table check, run when the search finds no proof.

A formula that some valuation makes false has no proof at all, and
the valuation says why far better than a failed search does.
"""

from typing import *
import itertools

from proplogic.formula import Formula, FormulaKind


class NotATautology:
  """
  The outcome for a formula that is false under `valuation`.
  """

  def __init__(self, formula: Formula, valuation: Dict[str, bool]):
    self.formula = formula
    self.valuation = valuation

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.formula == other.formula
      and self.valuation == other.valuation)

  def __str__(self):
    values = ', '.join(
      f"{name} = {'true' if value else 'false'}"
      for name, value in self.valuation.items()
    )
    return f'{self.formula} turns out false when: {values}'

  def __repr__(self):
    return f'<NotATautology {self.formula}: {self.valuation}>'


def atoms(formula: Formula) -> List[str]:
  """
  Names of the atoms in `formula`, sorted
  """
  if formula.kind == FormulaKind.ATOM:
    return [formula.name]
  names = set()
  for arg in formula.args:
    names.update(atoms(arg))
  return sorted(names)

def evaluate(formula: Formula, valuation: Dict[str, bool]) -> bool:
  kind = formula.kind
  if kind == FormulaKind.ATOM:
    return valuation[formula.name]
  if kind == FormulaKind.NOT:
    return not evaluate(formula.contained, valuation)
  if kind == FormulaKind.AND:
    return evaluate(formula.left, valuation) and evaluate(formula.right, valuation)
  if kind == FormulaKind.OR:
    return evaluate(formula.left, valuation) or evaluate(formula.right, valuation)
  if kind == FormulaKind.TO:
    return not evaluate(formula.left, valuation) or evaluate(formula.right, valuation)
  raise ValueError(f'Unrecognized formula kind {kind}')

def refute(formula: Formula, limit: Optional[int] = None) -> Optional[NotATautology]:
  """
  Find a valuation under which `formula` is false.
  Valuations are tried with every atom true first, and at most
  `limit` of them are tried if a limit is given.
  Returns None if no such valuation was found.
  """
  names = atoms(formula)
  valuations = itertools.product([True, False], repeat=len(names))
  for values in itertools.islice(valuations, limit):
    valuation = dict(zip(names, values))
    if not evaluate(formula, valuation):
      return NotATautology(formula, valuation)
  return None
