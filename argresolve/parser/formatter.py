# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders command signatures, usage lines and diagnostics as plain text.

`HelpFormatter` produces strings so the same rendering can be printed with Rich,
embedded in an exception message, or returned to a caller. Documentation is
word-wrapped with Rich's text layout to fit `total_width` columns.

Signature layout:

    build
      Build the project.
      -t --target <str>    Name of the target to build. Long documentation is
                           wrapped to the configured width.
      --jobs <int>         Number of parallel jobs.
      --verbose            Print every step.

Diagnostics are rendered one per line with a fixed vocabulary, for example
`Missing argument: --target <str>` or `Unknown argument: "--wat"`.
"""
from __future__ import annotations

from typing import Sequence

from rich.text import Text

from argresolve.console import console
from argresolve.parser.arity import Arity
from argresolve.parser.command import CommandSpec
from argresolve.parser.diagnostics import Diagnostic, DiagnosticKind, Failure
from argresolve.parser.parameter import ParameterSpec
from argresolve.parser.readers import ReaderRegistry

INDENT = "  "
COLUMN_GAP = 2
MIN_DOC_WIDTH = 20


def wrap_text(text: str, width: int) -> list[str]:
    """Word-wrap `text` to `width` columns, keeping explicit line breaks."""
    if not text:
        return []
    lines = Text(text).wrap(console, max(width, 1))
    return [line.plain.rstrip() for line in lines]


class HelpFormatter:
    """
    Text renderer for help and diagnostics.

    Args:
        registry (ReaderRegistry): Supplies each parameter's type label.
        total_width (int): Maximum line width for wrapped documentation.
        docs_on_new_line (bool): Put parameter documentation on its own line.
        print_help_on_exit (bool): Append the expected signature to failures.
    """

    def __init__(
        self,
        registry: ReaderRegistry,
        total_width: int = 95,
        docs_on_new_line: bool = False,
        print_help_on_exit: bool = True,
    ) -> None:
        self.registry = registry
        self.total_width = total_width
        self.docs_on_new_line = docs_on_new_line
        self.print_help_on_exit = print_help_on_exit

    def label(self, parameter: ParameterSpec) -> str:
        """Type placeholder such as `<int>`, empty for flags."""
        if parameter.is_flag:
            return ""
        reader = self.registry.get(parameter.type_tag)
        label = f"<{reader.short_label}>"
        if parameter.arity == Arity.REPEATABLE or reader.always_repeatable:
            label += "..."
        return label

    def flag_text(self, parameter: ParameterSpec) -> str:
        """Left column of a help row: aliases plus type placeholder."""
        return " ".join(filter(None, [*parameter.display_flags, self.label(parameter)]))

    def reference_text(self, parameter: ParameterSpec) -> str:
        """Name used in diagnostics: the long spelling plus type placeholder."""
        return " ".join(filter(None, [parameter.display_flags[-1], self.label(parameter)]))

    def is_required(self, parameter: ParameterSpec) -> bool:
        if parameter.has_default or parameter.arity != Arity.SINGLE:
            return False
        return not self.registry.get(parameter.type_tag).allow_empty

    def _parameter_rows(self, parameters: Sequence[ParameterSpec]) -> list[str]:
        if not parameters:
            return []
        flag_texts = [self.flag_text(parameter) for parameter in parameters]
        left_width = max(len(text) for text in flag_texts)
        doc_indent = len(INDENT) + left_width + COLUMN_GAP
        doc_width = self.total_width - doc_indent
        docs_on_new_line = self.docs_on_new_line or doc_width < MIN_DOC_WIDTH

        lines: list[str] = []
        for parameter, text in zip(parameters, flag_texts):
            if docs_on_new_line:
                lines.append(f"{INDENT}{text}")
                nested = INDENT * 2
                for doc_line in wrap_text(parameter.doc, self.total_width - len(nested)):
                    lines.append(f"{nested}{doc_line}".rstrip())
                continue
            doc_lines = wrap_text(parameter.doc, doc_width)
            if not doc_lines:
                lines.append(f"{INDENT}{text}")
                continue
            lines.append(f"{INDENT}{text:<{left_width}}{' ' * COLUMN_GAP}{doc_lines[0]}")
            for doc_line in doc_lines[1:]:
                lines.append(f"{' ' * doc_indent}{doc_line}".rstrip())
        return lines

    def render_signature(self, command: CommandSpec) -> str:
        """Render the command name, its documentation and one row per parameter."""
        lines = [command.name]
        for doc_line in wrap_text(command.doc, self.total_width - len(INDENT)):
            lines.append(f"{INDENT}{doc_line}".rstrip())
        lines.extend(self._parameter_rows(command.flatten()))
        return "\n".join(lines)

    def render_command_list(self, commands: Sequence[CommandSpec]) -> str:
        """Render every command's signature under an `Available subcommands:` header."""
        blocks = [self.render_signature(command) for command in commands]
        return "Available subcommands:\n\n" + "\n\n".join(blocks)

    def render_help(self, commands: Sequence[CommandSpec]) -> str:
        if len(commands) == 1:
            return self.render_signature(commands[0])
        return self.render_command_list(commands)

    def render_usage(self, command: CommandSpec) -> str:
        """One-line usage summary, optional parameters in brackets."""
        parts = [command.name]
        for parameter in command.flatten():
            text = self.reference_text(parameter)
            parts.append(text if self.is_required(parameter) else f"[{text}]")
        return " ".join(parts)

    def render_diagnostic(self, diagnostic: Diagnostic) -> str:
        kind = diagnostic.kind
        parameter = diagnostic.parameter
        if kind == DiagnosticKind.MISSING_ARGUMENT:
            assert parameter is not None, "missing argument without parameter"
            return f"Missing argument: {self.reference_text(parameter)}"
        if kind == DiagnosticKind.MISSING_VALUE:
            assert parameter is not None, "missing value without parameter"
            return f"Missing value for argument: {self.reference_text(parameter)}"
        if kind == DiagnosticKind.UNKNOWN_ARGUMENT:
            return f'Unknown argument: "{diagnostic.token}"'
        if kind == DiagnosticKind.DUPLICATE_ARGUMENT:
            assert parameter is not None, "duplicate argument without parameter"
            return (
                f"Duplicate argument: {self.reference_text(parameter)} "
                f'("{diagnostic.token}")'
            )
        if kind == DiagnosticKind.CONVERSION_ERROR:
            assert parameter is not None, "conversion error without parameter"
            tokens = " ".join(diagnostic.tokens)
            return (
                f"Invalid argument {self.reference_text(parameter)} failed to parse "
                f'"{tokens}": {diagnostic.message}'
            )
        if kind == DiagnosticKind.MISSING_COMMAND:
            return f"Need to specify a subcommand: {', '.join(diagnostic.commands)}"
        if kind == DiagnosticKind.UNKNOWN_COMMAND:
            return (
                f'Unable to find subcommand: "{diagnostic.token}", '
                f"available subcommands: {', '.join(diagnostic.commands)}"
            )
        raise ValueError(f"Unsupported diagnostic kind: {kind}")

    def render_failure(
        self, failure: Failure, commands: Sequence[CommandSpec] = ()
    ) -> str:
        """
        Render every diagnostic of `failure`, one per line.

        When `print_help_on_exit` is set, the expected signature of the failed
        command follows, or the list of `commands` if no command was selected.
        """
        lines = [self.render_diagnostic(diagnostic) for diagnostic in failure.diagnostics]
        if self.print_help_on_exit:
            if failure.command is not None:
                lines.append("Expected signature:")
                lines.append(self.render_signature(failure.command))
            elif commands:
                lines.append(self.render_command_list(commands))
        return "\n".join(lines)
