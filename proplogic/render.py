from typing import *
import enum

from proplogic.proof import ProofNode, Rule

"""

This module turns proof trees into text, in one of two notations.

Plain notation draws the tree top-down, conclusion first. Each
premise hangs off a '+', and a '|' keeps the rule of a premise
running down past its subtree while a later sibling is still to come:

  (A ∨ B → C) → (A → C) ∧ (B → C) : 1
  + (A → C) ∧ (B → C)
    + A → C : 2
    | + C
    |   + A ∨ B
    |   | + A from: 2
    |   + A ∨ B → C from: 1
    + B → C : 3
      ...

A node that discharges assumptions is marked ': n', and an
assumption leaf names the number it uses with 'from: n'.

TeX notation is for bussproofs, where premises come before the
inference that uses them:

  \\begin{prooftree}
      \\AxiomC{$[A]$}
      \\RightLabel{\\scriptsize $\\to$I}
    \\UnaryInfC{$B \\to A$}
    ...
  \\end{prooftree}

TeX output carries no reference numbers; assumptions that the tree
discharges are bracketed.

Both renderings depend on nothing but the tree.

"""


class RenderMode(enum.Enum):
  PLAIN = 'plain'
  TEX   = 'tex'


def render(proof: ProofNode, mode: RenderMode = RenderMode.PLAIN) -> str:
  if mode == RenderMode.TEX:
    return render_tex(proof)
  return render_plain(proof)


def plain_line(node: ProofNode) -> str:
  if node.rule == Rule.ASSUMPTION:
    return f'{node.claim} from: {node.reference}'
  if node.discharged:
    numbers = ', '.join(str(number) for number in node.discharged)
    return f'{node.claim} : {numbers}'
  return str(node.claim)

def plain_lines(node: ProofNode) -> List[str]:
  lines = [plain_line(node)]
  for idx, subproof in enumerate(node.subproofs):
    is_last = idx == len(node.subproofs) - 1
    sublines = plain_lines(subproof)
    lines.append('+ ' + sublines[0])
    continuation = '  ' if is_last else '| '
    lines.extend(continuation + line for line in sublines[1:])
  return lines

def render_plain(proof: ProofNode) -> str:
  return '\n'.join(plain_lines(proof)) + '\n'


INFERENCE_macros = {
  1: r'\UnaryInfC',
  2: r'\BinaryInfC',
  3: r'\TrinaryInfC',
}

def tex_lines(node: ProofNode, depth: int, discharged: Set[int]) -> List[str]:
  indentation = '  ' * depth

  if node.rule == Rule.ASSUMPTION:
    formula = node.claim.tex
    if node.reference in discharged:
      formula = f'[{formula}]'
    return [f'{indentation}\\AxiomC{{${formula}$}}']

  lines = []
  for subproof in node.subproofs:
    lines.extend(tex_lines(subproof, depth + 1, discharged))

  macro = INFERENCE_macros[len(node.subproofs)]
  lines.append(f'{indentation}\\RightLabel{{\\scriptsize {node.rule.tex}}}')
  lines.append(f'{indentation}{macro}{{${node.claim.tex}$}}')
  return lines

def discharged_numbers(node: ProofNode) -> Set[int]:
  numbers = set(node.discharged)
  for subproof in node.subproofs:
    numbers |= discharged_numbers(subproof)
  return numbers

def render_tex(proof: ProofNode) -> str:
  lines = [
    r'\begin{prooftree}',
    *tex_lines(proof, 1, discharged_numbers(proof)),
    r'\end{prooftree}',
  ]
  return '\n'.join(lines) + '\n'
