from typing import *
import enum

from proplogic.pretty import *


class FormulaKind(enum.Enum):
  TO   = 'to'
  OR   = 'or'
  AND  = 'and'
  NOT  = 'not'

  ATOM = 'atom'


class Formula:

  """

  Represents a propositional formula.
  This class contains no search or rendering logic; it is a value.

  Instances are created with a kind, as well as 1 or 2 arguments.
  Atoms take their name; every other kind takes Formula arguments.

  An example to represent the formula 'A to B' is:
  >>> A = Formula(FormulaKind.ATOM, 'A')
  >>> B = Formula(FormulaKind.ATOM, 'B')
  >>> implication = Formula(FormulaKind.TO, A, B)

  If the formula is a binary op, its children may be accessed
  with the use of .left and .right:
  >>> assert implication.left == A
  >>> assert implication.right == B

  If it's a negation, its child may be accessed via .contained:
  >>> not_A = Formula(FormulaKind.NOT, A)
  >>> assert not_A.contained == A

  Formulas compare and hash by shape, so they may be shared freely
  between proofs and used as dictionary keys.

  """

  __slots__ = ('kind', 'args')

  def __init__(self, kind: FormulaKind, *args):
    object.__setattr__(self, 'kind', kind)
    object.__setattr__(self, 'args', args)

  def __setattr__(self, name, value):
    raise AttributeError(f'Formula is immutable; cannot set {name!r}')

  # convenience .left and .right for binary ops
  @property
  def left(self): return self.args[0]
  @property
  def right(self): return self.args[1]

  # convenience .contained for negation
  @property
  def contained(self): return self.args[0]

  # convenience .name for atoms
  @property
  def name(self): return self.args[0]

  @property
  def is_binary(self):
    return self.kind in (FormulaKind.AND, FormulaKind.OR, FormulaKind.TO)

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.kind == other.kind
      and self.args == other.args)

  def __hash__(self):
    return hash((self.kind, self.args))

  def sigil(self, *, tex=False):
    if tex:
      return {
        FormulaKind.TO : tex_TO,
        FormulaKind.OR : tex_OR,
        FormulaKind.AND: tex_AND,
        FormulaKind.NOT: tex_NOT,
      }[self.kind]
    return {
      FormulaKind.TO : pretty_TO,
      FormulaKind.OR : pretty_OR,
      FormulaKind.AND: pretty_AND,
      FormulaKind.NOT: pretty_NOT,
    }[self.kind]

  def needs_parens_within(self, parent: 'Formula') -> bool:
    """
    Whether this formula has to be parenthesised when it appears
    as an operand of `parent`.
    """
    if parent.kind == FormulaKind.TO:
      return self.kind == FormulaKind.TO
    return self.is_binary

  def prettify(self, *, tex=False):
    if self.kind == FormulaKind.ATOM:
      return self.name

    def operand(child):
      text = child.prettify(tex=tex)
      if child.needs_parens_within(self):
        text = f'{pretty_OPEN}{text}{pretty_CLOSE}'
      return text

    if self.kind == FormulaKind.NOT:
      pretty_contained = operand(self.contained)
      if tex:
        return f'{self.sigil(tex=True)} {pretty_contained}'
      return f'{self.sigil()}{pretty_contained}'

    pretty_left = operand(self.left)
    pretty_right = operand(self.right)
    return f'{pretty_left} {self.sigil(tex=tex)} {pretty_right}'

  @property
  def tex(self):
    return self.prettify(tex=True)

  def __str__(self):
    return self.prettify()

  def __repr__(self):
    return f'|{self}|'


def Atom(name: str) -> Formula:
  return Formula(FormulaKind.ATOM, name)

def Not(contained: Formula) -> Formula:
  return Formula(FormulaKind.NOT, contained)

def And(left: Formula, right: Formula) -> Formula:
  return Formula(FormulaKind.AND, left, right)

def Or(left: Formula, right: Formula) -> Formula:
  return Formula(FormulaKind.OR, left, right)

def To(left: Formula, right: Formula) -> Formula:
  return Formula(FormulaKind.TO, left, right)
