from typing import *
import enum

from proplogic.formula import Formula, FormulaKind, And, Or, To
from proplogic.context import Assumption, ProofContext
from proplogic.pretty import *
from proplogic.util import indent


class Rule(enum.Enum):
  ASSUMPTION     = 'assumption'

  AND_INTRO      = 'and-intro'
  AND_ELIM_LEFT  = 'and-elim-left'
  AND_ELIM_RIGHT = 'and-elim-right'
  OR_INTRO_LEFT  = 'or-intro-left'
  OR_INTRO_RIGHT = 'or-intro-right'
  OR_ELIM        = 'or-elim'
  TO_INTRO       = 'to-intro'
  TO_ELIM        = 'to-elim'

  def __str__(self):
    return self.value

  @property
  def tex(self):
    return {
      Rule.ASSUMPTION     : '',
      Rule.AND_INTRO      : f'${tex_AND}$I',
      Rule.AND_ELIM_LEFT  : f'${tex_AND}$E',
      Rule.AND_ELIM_RIGHT : f'${tex_AND}$E',
      Rule.OR_INTRO_LEFT  : f'${tex_OR}$I',
      Rule.OR_INTRO_RIGHT : f'${tex_OR}$I',
      Rule.OR_ELIM        : f'${tex_OR}$E',
      Rule.TO_INTRO       : f'${tex_TO}$I',
      Rule.TO_ELIM        : f'${tex_TO}$E',
    }[self]


class InternalInvariantViolation(Exception):
  """
  A proof tree broke the discharge bookkeeping or a rule's shape.
  This is a programming error, never a property of the input.
  """


class ProofNode:

  """

  Represents a node in the proof tree. For instance, the tree

    prove <A → A> via to-intro, discharging 1:
      prove <A> via assumption 1

  is reified as

    leaf = ProofNode(
      claim = Atom('A'),
      rule = Rule.ASSUMPTION,
      reference = 1,
    )

    root = ProofNode(
      claim = To(Atom('A'), Atom('A')),
      rule = Rule.TO_INTRO,
      subproofs = [leaf],
      discharges = [1],
    )

  Leaves are always assumptions and carry the `reference` number of
  the assumption they use. The nodes that open assumptions, to-intro
  and or-elim, carry the numbers they close in `discharges`, one per
  opened assumption; a discharge that no leaf ended up using is None.

  Subproofs are ordered the way the premises of the rule are written:

    and-intro   proof of left, proof of right
    to-elim     proof of antecedent, proof of implication
    or-elim     proof of disjunction, left case, right case

  """

  __slots__ = ('claim', 'rule', 'subproofs', 'reference', 'discharges')

  def __init__(
      self: 'ProofNode',
      *,
      claim: Formula,
      rule: Rule,
      subproofs: Sequence['ProofNode'] = (),
      reference: Optional[int] = None,
      discharges: Sequence[Optional[int]] = (),
    ) -> None:

    self.claim = claim
    self.rule = rule
    self.subproofs = tuple(subproofs)
    self.reference = reference
    self.discharges = tuple(discharges)

  @staticmethod
  def assumption(assumption: Assumption) -> 'ProofNode':
    return ProofNode(
      claim     = assumption.formula,
      rule      = Rule.ASSUMPTION,
      reference = assumption.number,
    )

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.claim == other.claim
      and self.rule == other.rule
      and self.subproofs == other.subproofs
      and self.reference == other.reference
      and self.discharges == other.discharges)

  def __repr__(self):
    return f'<Proof of {self.claim} via {self.rule}>'

  @property
  def discharged(self) -> List[int]:
    return [number for number in self.discharges if number is not None]

  def scopes(self) -> Iterator[Tuple['ProofNode', Optional[Assumption]]]:
    """
    Pair each subproof with the assumption that this node opens for it,
    or None if the subproof sees no new assumption
    """

    opened = [None] * len(self.subproofs)

    if self.rule == Rule.TO_INTRO:
      opened[0] = (self.claim.left, self.discharges[0])
    elif self.rule == Rule.OR_ELIM:
      disjunction = self.subproofs[0].claim
      opened[1] = (disjunction.left, self.discharges[0])
      opened[2] = (disjunction.right, self.discharges[1])

    for subproof, scope in zip(self.subproofs, opened):
      if scope is None or scope[1] is None:
        yield subproof, None
      else:
        yield subproof, Assumption(*scope)

  def leaves(self) -> Iterator['ProofNode']:
    if self.rule == Rule.ASSUMPTION:
      yield self
    for subproof in self.subproofs:
      yield from subproof.leaves()

  @property
  def pretty(self):
    text = f'prove <{self.claim}> via {self.rule}'
    if self.rule == Rule.ASSUMPTION:
      text += f' {self.reference}'
    if self.discharged:
      text += ', discharging ' + ', '.join(map(str, self.discharged))
    if self.subproofs:
      text += ':\n'
      subtext = '\n'.join(subproof.pretty for subproof in self.subproofs)
      text += indent(subtext, '|   ')
    return text

  def renumbered(self, first: int = 1) -> 'ProofNode':
    """

    Return a copy of this tree whose discharged numbers run first, first+1, ...
    in pre-order. Discharges that no leaf refers to become None.
    Leaves referring to numbers that this tree does not discharge keep them.

    """

    referenced = {leaf.reference for leaf in self.leaves()}
    mapping = {}

    def assign(node):
      for number in node.discharges:
        if number is not None and number in referenced and number not in mapping:
          mapping[number] = first + len(mapping)
      for subproof in node.subproofs:
        assign(subproof)

    def rebuild(node):
      return ProofNode(
        claim      = node.claim,
        rule       = node.rule,
        subproofs  = [rebuild(subproof) for subproof in node.subproofs],
        reference  = mapping.get(node.reference, node.reference),
        discharges = [mapping.get(number) for number in node.discharges],
      )

    assign(self)
    return rebuild(self)


"""

Each rule constrains how its claim relates to the claims of its
premises. `check_rule` looks a node up here and fails if the shapes
do not fit.

"""

def _premises_fit(node: ProofNode) -> bool:
  claim = node.claim
  premises = [subproof.claim for subproof in node.subproofs]
  rule = node.rule

  if rule == Rule.ASSUMPTION:
    return premises == [] and node.reference is not None
  if rule == Rule.AND_INTRO:
    return len(premises) == 2 and claim == And(*premises)
  if rule == Rule.AND_ELIM_LEFT:
    return len(premises) == 1 and premises[0].kind == FormulaKind.AND and premises[0].left == claim
  if rule == Rule.AND_ELIM_RIGHT:
    return len(premises) == 1 and premises[0].kind == FormulaKind.AND and premises[0].right == claim
  if rule == Rule.OR_INTRO_LEFT:
    return len(premises) == 1 and claim.kind == FormulaKind.OR and claim.left == premises[0]
  if rule == Rule.OR_INTRO_RIGHT:
    return len(premises) == 1 and claim.kind == FormulaKind.OR and claim.right == premises[0]
  if rule == Rule.OR_ELIM:
    return (len(premises) == 3 and len(node.discharges) == 2
      and premises[0].kind == FormulaKind.OR
      and premises[1] == claim and premises[2] == claim)
  if rule == Rule.TO_INTRO:
    return (len(premises) == 1 and len(node.discharges) == 1
      and claim.kind == FormulaKind.TO and claim.right == premises[0])
  if rule == Rule.TO_ELIM:
    return len(premises) == 2 and premises[1] == To(premises[0], claim)
  return False

def check_rule(node: ProofNode) -> None:
  if not _premises_fit(node):
    raise InternalInvariantViolation(
      f'{node.rule} cannot conclude {node.claim} from '
      f'{[str(subproof.claim) for subproof in node.subproofs]}')

def check_discharges(proof: ProofNode, context: Optional[ProofContext] = None) -> None:
  """

  Verify that `proof` is a well-formed derivation under `context`:
  every node fits its rule, every leaf refers to an assumption that
  is live where the leaf stands and has the leaf's formula, and no
  number is discharged twice or shadows a number already in `context`.

  Raises InternalInvariantViolation on the first problem found.

  """

  if context is None:
    context = ProofContext()

  discharged = set()

  def visit(node, context):
    check_rule(node)

    if node.rule == Rule.ASSUMPTION:
      live = context.get(node.reference)
      if live is None:
        raise InternalInvariantViolation(
          f'{node.claim} refers to assumption {node.reference}, which is not live here')
      if live.formula != node.claim:
        raise InternalInvariantViolation(
          f'{node.claim} refers to assumption {node.reference}, which is {live.formula}')
      return

    for number in node.discharged:
      if number in discharged or context.get(number) is not None:
        raise InternalInvariantViolation(f'assumption {number} is discharged twice')
      discharged.add(number)

    for subproof, opened in node.scopes():
      if opened is None:
        visit(subproof, context)
      else:
        visit(subproof, context.push(opened.formula, opened.number))

  visit(proof, context)
