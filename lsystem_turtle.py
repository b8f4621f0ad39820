#!/usr/bin/env python3
"""lsystem_turtle.py

A parametric L-system grammar engine with a 3D turtle interpreter.

Pipeline:
  axiom + ordered rules --expand--> string --tokenize--> tokens
      --interpret(TurtleConfig)--> list of 3D line segments

Key features:
- First-occurrence-wins rule tables (duplicate keys are ignored).
- Permissive tokenizer with `symbol(number)` parameters.
- 3D turtle with yaw/pitch/roll about fixed world axes, branching via
  push/pop, width/length scaling and a material palette.
- JSON-based input configuration and JSON segment export.
- Random config generator for experimentation.

Run:
  python lsystem_turtle.py generate config.json segments.json
  python lsystem_turtle.py validate config.json
  python lsystem_turtle.py random out.json --seed 123
  python lsystem_turtle.py --help
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import random
import re
import sys
import warnings
from collections.abc import Generator, Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import Any, Union, cast

import numpy as np

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]
Material = Any

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
UP: Vec3 = (0.0, 1.0, 0.0)


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class BranchUnderflowError(ValueError):
    """A branch pop was interpreted while the branch stack was empty."""

    def __init__(self, index: int, symbol: str = "]") -> None:
        super().__init__(
            f"branch pop '{symbol}' at token {index} encountered with empty stack"
        )
        self.index = index
        self.symbol = symbol


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    _require(math.isfinite(x), f"{path} must be finite")
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be an array")
    return cast(list[Any], x)


def _as_vec3(x: Any, path: str) -> Vec3:
    items = _as_list(x, path)
    _require(len(items) == 3, f"{path} must have exactly 3 components")
    a, b, c = (_as_float(v, f"{path}[{i}]") for i, v in enumerate(items))
    return (a, b, c)


# -------------------------
# Data model
# -------------------------


@dataclass(frozen=True)
class Rule:
    key: str
    replacement: str

    @classmethod
    def normalized(cls, key: str, replacement: str) -> Rule:
        """Build a rule, truncating a multi-character key to its first character."""
        if len(key) > 1:
            warnings.warn(
                f"rule key {key!r} reset to a single character: {key[0]!r}",
                UserWarning,
                stacklevel=2,
            )
            key = key[0]
        return cls(key, replacement)


RuleLike = Union[Rule, tuple[str, str]]


@dataclass(frozen=True)
class Token:
    symbol: str
    parameter: float | None = None


@dataclass(frozen=True)
class TurtleState:
    position: Vec3
    heading: Vec3
    length: float
    width: float
    material: Material = None


@dataclass(frozen=True)
class Segment:
    start: Vec3
    end: Vec3
    width: float
    material: Material = None

    @property
    def vector(self) -> Vec3:
        return _vec3(np.subtract(self.end, self.start))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(np.subtract(self.end, self.start)))

    @property
    def midpoint(self) -> Vec3:
        return _vec3(np.add(self.start, self.end) / 2.0)

    @property
    def direction(self) -> Vec3:
        """Unit vector from start to end; zero for a degenerate segment."""
        return normalize(self.vector)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": list(self.start),
            "end": list(self.end),
            "width": self.width,
            "material": self.material,
        }


@dataclass(frozen=True)
class TurtleConfig:
    angle: float = 25.0
    width_scale: float = 2.0
    length_scale: float = 1.5
    materials: tuple[Material, ...] = ()
    default_material: Material = None
    initial_heading: Vec3 = UP
    initial_length: float = 1.0
    initial_width: float = 0.1


# -------------------------
# Rule table
# -------------------------


class RuleTable:
    """Lookup from symbol to replacement where the first rule for a key wins."""

    def __init__(self, rules: Iterable[RuleLike] = ()) -> None:
        self._rules: dict[str, str] = {}
        for item in rules:
            if isinstance(item, Rule):
                rule = Rule.normalized(item.key, item.replacement)
            else:
                key, replacement = item
                rule = Rule.normalized(key, replacement)

            if not rule.key:
                warnings.warn(
                    f"rule with empty key ignored (replacement {rule.replacement!r})",
                    UserWarning,
                    stacklevel=2,
                )
                continue
            if rule.key in self._rules:
                logger.debug("duplicate rule for %r ignored", rule.key)
                continue
            self._rules[rule.key] = rule.replacement

    def lookup(self, symbol: str) -> str | None:
        return self._rules.get(symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({self._rules!r})"


# -------------------------
# Expansion
# -------------------------


def iter_generations(
    axiom: str, rules: RuleTable | Iterable[RuleLike], iterations: int
) -> Generator[str, None, None]:
    """Yield the axiom followed by each of the `iterations` rewritten generations."""
    _require(iterations >= 0, "iterations must be >= 0")
    table = rules if isinstance(rules, RuleTable) else RuleTable(rules)

    current = axiom
    yield current
    for _ in range(iterations):
        parts: list[str] = []
        for ch in current:
            replacement = table.lookup(ch)
            parts.append(ch if replacement is None else replacement)
        current = "".join(parts)
        yield current


def expand(
    axiom: str, rules: RuleTable | Iterable[RuleLike], iterations: int
) -> str:
    """Apply the rules to every symbol of the axiom, `iterations` times.

    There is no termination or size check: self-referential rules grow the
    string exponentially and the caller must keep `iterations` small.
    """
    result = axiom
    for result in iter_generations(axiom, rules, iterations):
        pass
    return result


# -------------------------
# Tokenizer
# -------------------------

OPERATORS = frozenset('+-&^/\\[]!"?_')

_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*")
_FLOAT32_MAX = float(np.finfo(np.float32).max)


def is_symbol(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in OPERATORS


def _parse_parameter(text: str) -> float | None:
    if _NUMBER_RE.fullmatch(text) is None:
        return None
    value = float(text)
    if not math.isfinite(value) or abs(value) > _FLOAT32_MAX:
        return None
    return float(np.float32(value))


def tokenize(text: str) -> list[Token]:
    """Scan a symbol string into tokens.

    Whitespace and characters that are neither letters, decimal digits nor
    turtle operators are dropped. A symbol directly followed by `(...)` takes
    the enclosed number as its parameter. When the parentheses are closed but the
    content is not a number the whole group is consumed and the token stays
    parameterless; when they are unclosed or empty only the symbol is consumed.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        i += 1
        if ch.isspace() or not is_symbol(ch):
            continue

        param: float | None = None
        if i < n and text[i] == "(":
            close = text.find(")", i + 1)
            if close > i + 1:
                param = _parse_parameter(text[i + 1 : close])
                i = close + 1

        tokens.append(Token(ch, param))

    return tokens


# -------------------------
# Vector math
# -------------------------

X_AXIS, Y_AXIS, Z_AXIS = 0, 1, 2

_EPSILON = 1e-5


def _vec3(a: Any) -> Vec3:
    return (float(a[0]), float(a[1]), float(a[2]))


def normalize(v: Vec3) -> Vec3:
    arr = np.asarray(v, dtype=np.float64)
    norm = float(np.linalg.norm(arr))
    if norm <= _EPSILON:
        return ORIGIN
    return _vec3(arr / norm)


def rotation_matrix(axis: int, angle_deg: float) -> np.ndarray:
    """Right-handed rotation about a fixed world axis."""
    rad = math.radians(angle_deg)
    c, s = math.cos(rad), math.sin(rad)
    if axis == X_AXIS:
        m = [[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]]
    elif axis == Y_AXIS:
        m = [[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]]
    elif axis == Z_AXIS:
        m = [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
    else:
        raise ValueError(f"axis must be 0, 1 or 2; got {axis!r}")
    return np.array(m, dtype=np.float64)


def rotate(v: Vec3, axis: int, angle_deg: float) -> Vec3:
    return _vec3(rotation_matrix(axis, angle_deg) @ np.asarray(v, dtype=np.float64))


def compute_bounds(segments: list[Segment]) -> tuple[Vec3, Vec3]:
    _require(len(segments) > 0, "No drawable geometry produced.")
    points = np.array([p for s in segments for p in (s.start, s.end)])
    return _vec3(points.min(axis=0)), _vec3(points.max(axis=0))


# -------------------------
# Turtle interpreter
# -------------------------

# symbol -> (world axis, sign)
ROTATIONS: dict[str, tuple[int, int]] = {
    "+": (Z_AXIS, +1),  # yaw
    "-": (Z_AXIS, -1),
    "&": (X_AXIS, +1),  # pitch
    "^": (X_AXIS, -1),
    "/": (Y_AXIS, +1),  # roll
    "\\": (Y_AXIS, -1),
}


def initial_state(config: TurtleConfig) -> TurtleState:
    return TurtleState(
        position=ORIGIN,
        heading=normalize(config.initial_heading),
        length=config.initial_length,
        width=config.initial_width,
        material=config.default_material,
    )


def _divide(value: float, factor: float) -> float:
    # A zero factor yields inf (or nan for 0/0) instead of raising.
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(value), np.float64(factor)))


def interpret(tokens: Iterable[Token], config: TurtleConfig) -> list[Segment]:
    """Run the turtle over the tokens and return the drawn segments in order.

    Turtle commands (p = token parameter):
      F        move forward by p or the current length, drawing a segment
      + -      yaw about the world Z axis by +/-(p or angle)
      & ^      pitch about the world X axis
      / \\      roll about the world Y axis
      ! ?      multiply / divide the width by width_scale
      " _      multiply / divide the length by length_scale
      [ ]      push / pop the turtle state
      M        select materials[floor(p)] when p is a valid palette index

    Any other symbol is ignored. A `]` with nothing to pop raises
    BranchUnderflowError; branches left open at the end are discarded.
    """
    state = initial_state(config)
    stack: list[TurtleState] = []
    segments: list[Segment] = []

    for index, token in enumerate(tokens):
        sym = token.symbol
        p = token.parameter

        if sym == "F":
            step = state.length if p is None else p
            end = _vec3(
                np.add(state.position, np.multiply(state.heading, step))
            )
            segments.append(
                Segment(
                    start=state.position,
                    end=end,
                    width=state.width,
                    material=state.material,
                )
            )
            state = replace(state, position=end)
            continue

        if sym in ROTATIONS:
            axis, sign = ROTATIONS[sym]
            angle = config.angle if p is None else p
            heading = rotate(state.heading, axis, sign * angle)
            state = replace(state, heading=normalize(heading))
            continue

        if sym == "!":
            state = replace(state, width=state.width * config.width_scale)
            continue

        if sym == "?":
            width = _divide(state.width, config.width_scale)
            state = replace(state, width=width)
            continue

        if sym == '"':
            state = replace(state, length=state.length * config.length_scale)
            continue

        if sym == "_":
            length = _divide(state.length, config.length_scale)
            state = replace(state, length=length)
            continue

        if sym == "[":
            stack.append(state)
            continue

        if sym == "]":
            if not stack:
                raise BranchUnderflowError(index, sym)
            state = stack.pop()
            continue

        if sym == "M":
            if p is not None and math.isfinite(p):
                slot = math.floor(p)
                if 0 <= slot < len(config.materials):
                    state = replace(state, material=config.materials[slot])
            continue

    if stack:
        logger.debug("%d unclosed branch(es) discarded", len(stack))

    return segments


def generate(
    axiom: str,
    rules: RuleTable | Iterable[RuleLike],
    iterations: int,
    config: TurtleConfig,
) -> list[Segment]:
    """Expand, tokenize and interpret in one call."""
    text = expand(axiom, rules, iterations)
    tokens = tokenize(text)
    segments = interpret(tokens, config)
    logger.debug(
        "expanded %r over %d generation(s): %d symbols, %d tokens, %d segments",
        axiom,
        iterations,
        len(text),
        len(tokens),
        len(segments),
    )
    return segments


# -------------------------
# Config parsing
# -------------------------

MAX_ITERATIONS = 10


@dataclass(frozen=True)
class LSystemConfig:
    name: str
    axiom: str
    iterations: int
    rules: tuple[Rule, ...]
    turtle: TurtleConfig = field(default_factory=TurtleConfig)


def _parse_rule(item: Any, path: str) -> Rule:
    if isinstance(item, dict):
        key = _as_str(item.get("key"), f"{path}.key")
        replacement = _as_str(item.get("replacement", ""), f"{path}.replacement")
    else:
        pair = _as_list(item, path)
        _require(len(pair) == 2, f"{path} must be a [key, replacement] pair")
        key = _as_str(pair[0], f"{path}[0]")
        replacement = _as_str(pair[1], f"{path}[1]")
    _require(len(key) > 0, f"{path}.key must be non-empty")
    return Rule.normalized(key, replacement)


def parse_config(obj: dict[str, Any]) -> LSystemConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "L-System"), "name")
    axiom = _as_str(obj.get("axiom", ""), "axiom")
    _require(len(axiom) > 0, "axiom must be non-empty")

    iterations = _as_int(obj.get("iterations", 0), "iterations")
    _require(
        0 <= iterations <= MAX_ITERATIONS,
        f"iterations must be between 0 and {MAX_ITERATIONS}",
    )

    rules_obj = _as_list(obj.get("rules", []), "rules")
    rules = tuple(_parse_rule(item, f"rules[{i}]") for i, item in enumerate(rules_obj))

    turtle = _as_dict(obj.get("turtle", {}), "turtle")
    defaults = TurtleConfig()

    angle = _as_float(turtle.get("angle", defaults.angle), "turtle.angle")
    length = _as_float(turtle.get("length", defaults.initial_length), "turtle.length")
    width = _as_float(turtle.get("width", defaults.initial_width), "turtle.width")
    _require(length > 0, "turtle.length must be > 0")
    _require(width > 0, "turtle.width must be > 0")

    width_scale = _as_float(
        turtle.get("width_scale", defaults.width_scale), "turtle.width_scale"
    )
    length_scale = _as_float(
        turtle.get("length_scale", defaults.length_scale), "turtle.length_scale"
    )
    _require(width_scale > 0, "turtle.width_scale must be > 0")
    _require(length_scale > 0, "turtle.length_scale must be > 0")

    heading = _as_vec3(
        turtle.get("heading", list(defaults.initial_heading)), "turtle.heading"
    )
    _require(normalize(heading) != ORIGIN, "turtle.heading must be non-zero")

    materials_obj = _as_list(turtle.get("materials", []), "turtle.materials")
    materials = tuple(
        _as_str(m, f"turtle.materials[{i}]") for i, m in enumerate(materials_obj)
    )
    default_material = turtle.get("default_material")
    if default_material is not None:
        default_material = _as_str(default_material, "turtle.default_material")

    return LSystemConfig(
        name=name,
        axiom=axiom,
        iterations=iterations,
        rules=rules,
        turtle=TurtleConfig(
            angle=angle,
            width_scale=width_scale,
            length_scale=length_scale,
            materials=materials,
            default_material=default_material,
            initial_heading=heading,
            initial_length=length,
            initial_width=width,
        ),
    )


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def dump_json(obj: dict[str, Any], path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


def write_segments(segments: list[Segment], out_path: str, name: str) -> None:
    dump_json(
        {"name": name, "segments": [s.to_dict() for s in segments]},
        out_path,
    )


# -------------------------
# Random config generator
# -------------------------


def _random_balanced_word(
    rng: random.Random, length: int, *, p_branch: float = 0.20
) -> str:
    """Generate a random 3D replacement word with balanced brackets.

    Produces symbols from: F, + - & ^ / \\, !, ", [ ]
    Ensures brackets are balanced and never go negative.
    """
    word: list[str] = []
    depth = 0

    for _ in range(length):
        r = rng.random()
        if r < p_branch and depth < 3:
            # Thin and lengthen every new branch.
            word.append('[!"')
            depth += 1
            continue
        if r < p_branch * 2 and depth > 0:
            word.append("]")
            depth -= 1
            continue

        t = rng.random()
        if t < 0.5:
            word.append("F")
        else:
            word.append(rng.choice(sorted(ROTATIONS)))

    word.extend("]" * depth)

    if "F" not in word:
        word.append("F")

    return "".join(word)


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    angle = rng.choice([15, 20, 22.5, 25, 30, 36, 45, 60, 90])
    iterations = rng.randint(2, 4)
    length = rng.choice([0.5, 1.0, 1.5, 2.0])

    use_x = rng.random() < 0.5

    if use_x:
        axiom = "X"
        rule_f = _random_balanced_word(rng, rng.randint(4, 10))
        x_parts = []
        for _ in range(rng.randint(3, 6)):
            roll = rng.random()
            if roll < 0.40:
                x_parts.append("F")
            elif roll < 0.60:
                x_parts.append("X")
            elif roll < 0.85:
                x_parts.append(rng.choice(sorted(ROTATIONS)))
            else:
                x_parts.append("[M(1)X]")
        if "F" not in x_parts:
            x_parts.append("F")
        rules = [
            {"key": "F", "replacement": rule_f},
            {"key": "X", "replacement": "".join(x_parts)},
        ]
    else:
        axiom = "F"
        rules = [
            {"key": "F", "replacement": _random_balanced_word(rng, rng.randint(6, 14))}
        ]

    cfg: dict[str, Any] = {
        "name": "Random L-System",
        "axiom": axiom,
        "iterations": iterations,
        "rules": rules,
        "turtle": {
            "angle": angle,
            "length": length,
            "width": 0.1,
            "width_scale": 0.7,
            "length_scale": 0.9,
            "heading": [0, 1, 0],
            "materials": ["bark", "leaf"],
            "default_material": "bark",
        },
    }

    # Internal sanity check: generated config must always parse cleanly.
    parse_config(cfg)
    return cfg


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
INPUT JSON SYNTAX (generate / validate)

Top-level keys

  name: string (optional)
      A human-readable title; copied into the segment output.

  axiom: string (required)
      The initial word.

  iterations: integer 0..10 (default 0)
      Number of rewriting steps.

  rules: array (optional)
      Ordered production rules, each {"key": "F", "replacement": "FF"} or
      ["F", "FF"]. Keys are single characters; longer keys are truncated to
      their first character with a warning. When a key appears more than once
      the FIRST rule wins. Symbols without a rule rewrite to themselves.

  turtle: object (optional)
    turtle.angle: number (default 25)            default turn angle, degrees
    turtle.length: number > 0 (default 1)        initial step length
    turtle.width: number > 0 (default 0.1)       initial segment width
    turtle.width_scale: number > 0 (default 2)   factor for ! and ?
    turtle.length_scale: number > 0 (default 1.5) factor for " and _
    turtle.heading: [x, y, z] (default [0, 1, 0]) initial heading, non-zero
    turtle.materials: array of strings           palette for M(index)
    turtle.default_material: string or null      material before any M

Symbols (p = optional parameter written as symbol(number), e.g. F(2.5))

  F      move forward by p or the current length and emit a segment
  + -    yaw about the world Z axis by +/-(p or angle)
  & ^    pitch about the world X axis
  / \    roll about the world Y axis
  ! ?    multiply / divide width by width_scale
  " _    multiply / divide length by length_scale
  [ ]    push / pop the turtle state (pop on an empty stack is an error)
  M      select materials[floor(p)]; out-of-range indices are ignored

  Any other letter or digit is kept by the grammar but ignored by the turtle.
  Other characters are skipped.

OUTPUT (generate)

  {"name": ..., "segments": [{"start": [x,y,z], "end": [x,y,z],
                              "width": w, "material": m}, ...]}

RANDOM INPUT GENERATION (random)

  python lsystem_turtle.py random out.json --seed 123
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lsystem_turtle.py",
        description="Parametric 3D L-system turtle that outputs line segments.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pg = sub.add_parser(
        "generate",
        help="Generate the segments of an L-system JSON config.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("config", help="Path to the input JSON config.")
    pg.add_argument("output", help="Path to write the segment JSON.")

    pv = sub.add_parser(
        "validate",
        help="Validate a JSON config and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("config", help="Path to the input JSON config.")

    pr = sub.add_parser(
        "random",
        help="Generate a random JSON config for experimentation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("output", help="Where to write the generated JSON file.")
    pr.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


# -------------------------
# Commands
# -------------------------


def cmd_generate(config_path: str, output_path: str) -> None:
    cfg = parse_config(load_json(config_path))
    segments = generate(cfg.axiom, cfg.rules, cfg.iterations, cfg.turtle)
    write_segments(segments, output_path, cfg.name)
    logger.info("wrote %d segments to %s", len(segments), output_path)


_VALIDATE_SYMBOL_LIMIT = 10_000


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))
    table = RuleTable(cfg.rules)

    print(f"name: {cfg.name}")
    print(f"axiom length: {len(cfg.axiom)}")
    print(f"iterations: {cfg.iterations}")
    print(f"rules: {len(cfg.rules)} ({len(table)} distinct keys)")
    t = cfg.turtle
    print(
        "turtle: "
        f"angle={t.angle} length={t.initial_length} width={t.initial_width} "
        f"width_scale={t.width_scale} length_scale={t.length_scale} "
        f"heading={t.initial_heading}"
    )
    print(f"materials: {len(t.materials)}")

    # Stop rewriting once a generation exceeds the limit so that exponential
    # grammars are reported rather than expanded.
    text = cfg.axiom
    reached = 0
    truncated = False
    for reached, text in enumerate(iter_generations(cfg.axiom, table, cfg.iterations)):
        if len(text) > _VALIDATE_SYMBOL_LIMIT:
            text = text[:_VALIDATE_SYMBOL_LIMIT]
            truncated = True
            break

    tokens = tokenize(text)
    segments = interpret(tokens, t)
    sym_label = f"{len(text)}+" if truncated else str(len(text))
    print(f"symbols (sampled): {sym_label}")
    print(f"tokens: {len(tokens)}")
    print(f"segments: {len(segments)}")
    if truncated:
        print(
            f"warning: generation {reached} exceeds {_VALIDATE_SYMBOL_LIMIT} symbols; "
            "geometry stats are based on the first portion only"
        )
    if not segments:
        raise ConfigError("Config produces no drawable geometry")
    lo, hi = compute_bounds(segments)
    lo_label = ", ".join(f"{c:.4g}" for c in lo)
    hi_label = ", ".join(f"{c:.4g}" for c in hi)
    print(f"bounds: min=({lo_label}) max=({hi_label})")


def cmd_random(output_path: str, seed: int | None) -> None:
    cfg = generate_random_config(seed)
    dump_json(cfg, output_path)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)

    try:
        if args.cmd == "generate":
            cmd_generate(args.config, args.output)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except BranchUnderflowError as e:
        print(f"Grammar error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    finally:
        logging.captureWarnings(False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
