"""Tree-walking interpreter for hlang.

The interpreter evaluates the AST produced by :mod:`hlang.parser`
directly. All mutable evaluation state lives on an :class:`Interpreter`
instance: the active environment and the control-flow signal. Separate
instances share nothing and can run side by side.

``roko``, ``aage badho`` and ``wapas bhejo`` do not unwind the Python
stack. They set the control-flow signal, every block stops executing
statements once the signal is set, and the nearest loop or function
call inspects and clears it. Runtime errors, on the other hand, are
raised as :class:`~hlang.errors.HlangError` and abort the whole run.
"""

from __future__ import annotations

import math
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .ast import (
    Program, Node, Declaration, Assignment, Identifier, Literal,
    BinaryExpr, FunctionDecl, FunctionCall, IfStmt, WhileLoop,
    RepeatLoop, Break, Continue, Return,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    HlangError, NOT_A_FUNCTION, DIVISION_BY_ZERO, MODULO_BY_ZERO,
    UNSUPPORTED_OPERATOR, UNHANDLED_NODE, CALL_DEPTH_EXCEEDED,
)
from .parser import parse_program
from .types import NoneVal, coerce_literal, to_string, type_name


PRINT_BUILTIN = 'bol'

# Every hlang call nests several Python frames
RECURSION_LIMIT = 100_000
EVAL_STACK_SIZE = 512 * 1024 * 1024


def call_with_deep_stack(fn: Callable[..., Any], *args: Any) -> Any:
    """Call ``fn`` on a worker thread with a large stack and recursion limit.

    The caller blocks until the worker finishes. The return value or the
    raised exception is handed back to the calling thread.
    """
    outcome: Dict[str, Any] = {}

    def target() -> None:
        try:
            outcome['value'] = fn(*args)
        except BaseException as e:
            outcome['error'] = e

    saved_limit = sys.getrecursionlimit()
    saved_size = threading.stack_size(EVAL_STACK_SIZE)
    try:
        sys.setrecursionlimit(max(saved_limit, RECURSION_LIMIT))
        worker = threading.Thread(target=target, name='hlang-eval')
        worker.start()
        worker.join()
    finally:
        threading.stack_size(saved_size)
        sys.setrecursionlimit(saved_limit)
    if 'error' in outcome:
        raise outcome['error']
    return outcome['value']


class SignalKind(Enum):
    BREAK = 'break'
    CONTINUE = 'continue'
    RETURN = 'return'


@dataclass(frozen=True)
class ControlFlow:
    kind: SignalKind
    value: Any = None


class FunctionValue:
    """Represents a user-defined hlang function.

    ``env`` is the environment active where the function was declared.
    It is shared, not copied, so the function sees later assignments to
    the variables it closes over.
    """
    def __init__(self, name: str, params: List[str], body: List[Node], env: Environment):
        self.name = name
        self.params = params
        self.body = body
        self.env = env

    def __repr__(self) -> str:
        return f"<function {self.name}>"


class Interpreter:
    """Core interpreter that executes an hlang AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.env = self.global_env
        self.control_flow: Optional[ControlFlow] = None
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.global_env.declare(PRINT_BUILTIN, BuiltinFunction(PRINT_BUILTIN, self.builtin_print))

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def builtin_print(self, args: List[Any]) -> NoneVal:
        for value in args:
            print(to_string(value))
        return NoneVal()

    # Public API
    def run(self, program: Program) -> Any:
        if self.debug_level > 0 and self.debug_fp is None:
            # a later run on the same instance appends to the trace
            self.debug_fp = open(self.debug_file, 'a', encoding='utf-8')
        if self.debug_level >= 1:
            self.debug(f"run program with {len(program.body)} statements")
        try:
            try:
                result = call_with_deep_stack(self.evaluate, program)
            except RecursionError:
                raise HlangError(CALL_DEPTH_EXCEEDED, 'maximum call depth exceeded') from None
            if self.debug_level >= 1:
                self.debug(f"program finished -> {to_string(result)}")
            return result
        finally:
            self.control_flow = None
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Node]) -> Any:
        """Evaluate statements in order, stopping once a signal is raised."""
        result: Any = NoneVal()
        for stmt in statements:
            result = self.evaluate(stmt)
            if self.control_flow is not None:
                break
        return result

    def set_signal(self, kind: SignalKind, value: Any = None) -> None:
        self.control_flow = ControlFlow(kind, value)
        if self.debug_level >= 3:
            self.debug(f"signal {kind.value}")

    def evaluate(self, node: Optional[Node]) -> Any:
        # A pending signal suppresses everything until a loop or call clears it
        if self.control_flow is not None:
            return NoneVal()
        if node is None:
            return NoneVal()
        if self.debug_level >= 4:
            self.debug(f"evaluate {node!r}")
        if isinstance(node, Program):
            return self.execute_block(node.body)
        if isinstance(node, Declaration):
            value = self.evaluate(node.value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return self.env.declare(node.name, value)
        if isinstance(node, Assignment):
            value = self.evaluate(node.value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name}: {type_name(value)} = {to_string(value)}")
            return self.env.set(node.name, value)
        if isinstance(node, Identifier):
            return self.env.get(node.name)
        if isinstance(node, Literal):
            return coerce_literal(node.raw_text)
        if isinstance(node, BinaryExpr):
            # both operands are always evaluated, including for && and ||
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, FunctionDecl):
            func_value = FunctionValue(node.name, node.params, node.body, self.env)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return self.env.declare(node.name, func_value)
        if isinstance(node, FunctionCall):
            return self.call_function(node)
        if isinstance(node, IfStmt):
            return self.execute_if(node)
        if isinstance(node, WhileLoop):
            return self.execute_loop(node.body, node.condition)
        if isinstance(node, RepeatLoop):
            return self.execute_loop(node.body)
        if isinstance(node, Break):
            self.set_signal(SignalKind.BREAK)
            return NoneVal()
        if isinstance(node, Continue):
            self.set_signal(SignalKind.CONTINUE)
            return NoneVal()
        if isinstance(node, Return):
            value = self.evaluate(node.value)
            self.set_signal(SignalKind.RETURN, value)
            return value
        raise HlangError(UNHANDLED_NODE, f'unknown node type: {type(node).__name__}')

    def execute_if(self, node: IfStmt) -> Any:
        cond = self.evaluate(node.condition)
        truthy = self.is_truthy(cond)
        if self.debug_level >= 3:
            self.debug(f"if condition {to_string(cond)} -> {truthy}")
        if truthy:
            return self.execute_block(node.consequent)
        for clause in node.else_ifs:
            cond = self.evaluate(clause.condition)
            if self.is_truthy(cond):
                return self.execute_block(clause.consequent)
        if node.alternate is not None:
            return self.execute_block(node.alternate)
        return NoneVal()

    def execute_loop(self, body: List[Node], condition: Optional[Node] = None) -> Any:
        """Run a while loop, or a repeat loop when no condition is given."""
        result: Any = NoneVal()
        while True:
            if condition is not None:
                cond = self.evaluate(condition)
                if self.debug_level >= 3:
                    self.debug(f"loop condition {to_string(cond)}")
                if not self.is_truthy(cond):
                    break
            result = self.execute_block(body)
            if self.control_flow is None:
                continue
            kind = self.control_flow.kind
            if kind is SignalKind.BREAK:
                self.control_flow = None
                break
            if kind is SignalKind.CONTINUE:
                self.control_flow = None
                continue
            # a return keeps its signal and leaves the loop
            break
        return result

    def call_function(self, node: FunctionCall) -> Any:
        if node.name == PRINT_BUILTIN:
            for arg in node.args:
                self.builtin_print([self.evaluate(arg)])
            return NoneVal()

        func = self.env.get(node.name)
        if isinstance(func, BuiltinFunction):
            args = [self.evaluate(arg) for arg in node.args]
            return func.fn(args)
        if not isinstance(func, FunctionValue):
            raise HlangError(NOT_A_FUNCTION, f'{node.name} is not a function')

        # Arguments are evaluated in the caller's environment
        args = [self.evaluate(arg) for arg in node.args]
        # The new frame hangs off the closure environment, not the caller's
        call_env = Environment(parent=func.env)
        for index, param in enumerate(func.params):
            call_env.declare(param, args[index] if index < len(args) else NoneVal())
        if self.debug_level >= 3:
            self.debug(f"call {node.name}({', '.join(to_string(a) for a in args)})")

        saved_env, saved_flow = self.env, self.control_flow
        self.env, self.control_flow = call_env, None
        try:
            result = self.execute_block(func.body)
            if self.control_flow is not None and self.control_flow.kind is SignalKind.RETURN:
                result = self.control_flow.value
        finally:
            self.env, self.control_flow = saved_env, saved_flow
        if self.debug_level >= 3:
            self.debug(f"return from {node.name} -> {to_string(result)}")
        return result

    def is_truthy(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, float):
            return value != 0.0
        if isinstance(value, str):
            return len(value) > 0
        if isinstance(value, NoneVal):
            return False
        return True

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if isinstance(a, float) and isinstance(b, float):
            if op == '+':
                return a + b
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if op == '/':
                if b == 0.0:
                    raise HlangError(DIVISION_BY_ZERO, 'division by zero')
                return a / b
            if op == '%':
                return self.remainder(a, b)
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            if op == '>=':
                return a >= b
            if op == '==':
                return a == b
            if op == '!=':
                return a != b
        # Anything else added together is string concatenation
        if op == '+':
            return to_string(a) + to_string(b)
        raise HlangError(UNSUPPORTED_OPERATOR, f'unsupported operator: {op}')

    def remainder(self, a: float, b: float) -> float:
        """Integer remainder of the operands truncated toward zero.

        The result takes the sign of the dividend.
        """
        if b == 0.0:
            raise HlangError(MODULO_BY_ZERO, 'modulo by zero')
        if not (math.isfinite(a) and math.isfinite(b)):
            return math.nan
        dividend, divisor = int(a), int(b)
        if divisor == 0:
            raise HlangError(MODULO_BY_ZERO, 'modulo by zero')
        rem = abs(dividend) % abs(divisor)
        return float(-rem if dividend < 0 else rem)


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and run an hlang program from source.

    Returns the value of the last top-level statement evaluated. Runtime
    errors propagate as :class:`HlangError`.
    """
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program)


def run(source: str, debug_level: int = 0) -> Optional[HlangError]:
    """Run an hlang program, reporting a runtime error on stderr.

    Returns the error that stopped the program, or None when it ran to
    completion.
    """
    try:
        run_program(source, debug_level=debug_level)
    except HlangError as e:
        print(f"Runtime Error: {e.message}", file=sys.stderr)
        return e
    return None
