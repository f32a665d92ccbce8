"""
Natural-deduction prover for propositional logic.

  >>> from proplogic.main import prove
  >>> print(prove('A to A'))
  A → A : 1
  + A from: 1

"""

from proplogic.formula import Formula, FormulaKind, Atom, Not, And, Or, To
from proplogic.parse import parse, ParseError, ParseErrorKind
from proplogic.context import Assumption, ProofContext
from proplogic.proof import ProofNode, Rule, InternalInvariantViolation
from proplogic.prove import Budget, SearchExhausted, SearchReason, search, prove_formula
from proplogic.render import RenderMode, render
