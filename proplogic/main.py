from typing import *
import argparse
import logging
import pathlib
import sys

from proplogic.parse import parse, ParseError
from proplogic.prove import prove_formula, Budget, SearchExhausted
from proplogic.proof import ProofNode, InternalInvariantViolation, check_discharges
from proplogic.render import render, RenderMode
from proplogic.truth import refute, NotATautology

logger = logging.getLogger(__name__)

Outcome = Union[ProofNode, ParseError, NotATautology, SearchExhausted]


def solve(string: str, *, budget: Optional[Budget] = None) -> Outcome:
  """
  Parse, check and prove a formula.

  Returns the proof, or the reason there is none as a value.
  Raises InternalInvariantViolation if the proof found is malformed.
  """

  try:
    formula = parse(string)
  except ParseError as e:
    return e

  if budget is None:
    budget = Budget()

  proof = prove_formula(formula, budget)
  if isinstance(proof, ProofNode):
    check_discharges(proof)
    return proof

  # no more valuations than the search was allowed steps
  counterexample = refute(formula, limit=budget.max_steps)
  if counterexample is not None:
    return counterexample
  return proof

def describe(failure: Outcome, string: Optional[str] = None) -> str:
  """
  Format a failed outcome for the user
  """

  if isinstance(failure, ParseError):
    text = 'error when parsing:\n'
    if string is not None and '\n' not in string:
      text += f'{string}\n{" " * failure.position}^\n'
    return text + str(failure)

  if isinstance(failure, NotATautology):
    return f'error when checking:\n{failure}'

  if isinstance(failure, SearchExhausted):
    return f'error when solving:\n{failure}'

  raise TypeError(f'Not a failure: {failure!r}')

def respond(string: str, *, tex: bool = False, budget: Optional[Budget] = None) -> Tuple[bool, str]:
  """
  Answer one request: returns whether a proof was found, and the
  text to show, which is the rendered proof or an error message.
  """

  try:
    outcome = solve(string, budget=budget)
  except InternalInvariantViolation as e:
    logger.exception('Internal invariant violated while proving %r', string)
    return False, f'internal error:\n{e}'

  if isinstance(outcome, ProofNode):
    mode = RenderMode.TEX if tex else RenderMode.PLAIN
    return True, render(outcome, mode)

  return False, describe(outcome, string)

def prove(string: str, *, tex: bool = False, budget: Optional[Budget] = None) -> str:
  ok, text = respond(string, tex=tex, budget=budget)
  return text


# == # == # == #


def make_parser():
  parser = argparse.ArgumentParser(
    prog = 'proplogic',
    description = 'Proves propositional formulas by natural deduction (best effort).',
  )
  parser.add_argument('input', nargs='?',
    help='formula to prove (if omitted, formulas are read interactively)')
  parser.add_argument('-t', '--tex', action='store_true',
    help='output in TeX (bussproofs.sty)')
  parser.add_argument('-o', '--out', type=pathlib.Path,
    help='output file (if omitted, stdout)')
  parser.add_argument('--max-depth', type=int, default=32,
    help='deepest nesting of goals the search may reach')
  parser.add_argument('--max-steps', type=int, default=200_000,
    help='most goals the search may attempt')
  parser.add_argument('-v', '--verbose', action='store_true',
    help='log the search')
  return parser

def emit(text: str, out: Optional[pathlib.Path]):
  if out is not None:
    out.write_text(text, encoding='utf-8')
  else:
    print(text.rstrip('\n'))

def main(argv: Optional[List[str]] = None) -> int:
  parser = make_parser()
  args = parser.parse_args(argv)

  logging.basicConfig(
    level = logging.DEBUG if args.verbose else logging.WARNING,
    format = '%(levelname)s %(name)s: %(message)s',
  )

  try:
    budget = Budget(args.max_depth, args.max_steps)
  except ValueError as e:
    parser.error(str(e))

  if args.input is not None:
    ok, text = respond(args.input, tex=args.tex, budget=budget)
    emit(text, args.out)
    return 0 if ok else 1

  while True:
    try:
      line = input("input ('quit' to quit):\n")
    except EOFError:
      break
    if line.strip().startswith('quit'):
      break
    if not line.strip():
      continue
    ok, text = respond(line, tex=args.tex, budget=budget)
    emit(text, args.out)

  return 0


if __name__ == '__main__':
  sys.exit(main())
