"""
Help panel rendering for CFlags.

Layout
    <description (vX)>            or    ERROR: <message>

    Usage: <name> [--Options...] [...Arguments]
    Options:
      -a, --age int
            *Your age (default 18)
    Arguments:
      name           *Image name
    Help:
    <long help>
    Examples:
    <examples>

Placeholders {{cmd}}, {{command}}, {{binName}} and {{binFile}} are replaced in
every free-form text (description, option and argument descriptions, long help
and examples).

Palette keys
- description, error-label, error-message, section-label
- option-name, metavar, required, option-description, default
- argument-name, argument-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the binder's colorful is False, styling is suppressed.
"""
import json
from collections import defaultdict

from rich.text import Text

from .flags import unquote_usage
from .utils import *


def render(binder, error=None, /, *, console=None):
    console = binder.console if console is None else console
    styles = defaultdict(str, {
        # === Head ===
        "description": "bold #00E6FF",
        "error-label": "bold #EF4444",
        "error-message": "#E5E7EB",
        "section-label": "bold #FFD600",

        # === Options ===
        "option-name": "bold #22C55E",
        "metavar": "#9CA3AF",
        "required": "bold #EF4444",
        "option-description": "",
        "default": "bold #FF4D94",

        # === Arguments ===
        "argument-name": "bold #22C55E",
        "argument-description": "",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if binder.colorful else ""

    placeholders = {
        "{{cmd}}": binder.name,
        "{{command}}": binder.name,
        "{{binName}}": binder.name,
        "{{binFile}}": binder.bin_file,
    }

    def text(fragment, style=""):
        return Text(replaces(str(fragment), placeholders), styler(style))

    panel = Text()

    # Head: error banner replaces the description line
    if error is not None:
        panel.append("ERROR:", styler("error-label")).append(" ")
        panel.append_text(text(error, "error-message")).append("\n")
    else:
        descr = upperfirst(binder.desc)
        if binder.version:
            descr += " (v%s)" % binder.version
        panel.append_text(text(descr, "description")).append("\n\n")

    panel.append("Usage:", styler("section-label"))
    panel.append(" %s [--Options...] [...Arguments]\n" % binder.name)
    panel.append("Options:", styler("section-label")).append("\n")

    for flag in binder.flagset:
        option = binder.option(flag.name)

        line = Text("  ")
        line.append(", ".join(addprefixes(flag.name, option.shortcuts)), styler("option-name"))

        typename, usage = unquote_usage(flag)
        if typename:
            line.append(" ").append(typename, styler("metavar"))

        # single-letter flags without a value keep their usage on the same line
        if len(line) <= 4:
            line.append("    ")
        else:
            line.append("\n        ")

        if option.required:
            line.append("*", styler("required"))
        line.append_text(text(upperfirst(usage).replace("\n", "\n        "), "option-description"))

        if not flag.value.iszero(flag.default):
            default = json.dumps(flag.default, ensure_ascii=False) if flag.value.quoted else flag.default
            line.append(" (default ").append(default, styler("default")).append(")")

        panel.append_text(line).append("\n")

    if arguments := binder.arguments:
        panel.append("\n").append("Arguments:", styler("section-label")).append("\n")
        for arg in arguments:
            panel.append("  ")
            panel.append(padright(arg.name, binder.argwidth), styler("argument-name"))
            panel.append("   ")
            if arg.required:
                panel.append("*", styler("required"))
                panel.append_text(text(upperfirst(arg.descr), "argument-description"))
            else:
                panel.append_text(text(arg.helpdesc(), "argument-description"))
            panel.append("\n")

    if binder.long_help:
        panel.append("\n").append("Help:", styler("section-label")).append("\n")
        panel.append_text(text(binder.long_help.strip("\n"))).append("\n")

    if binder.example:
        panel.append("\n").append("Examples:", styler("section-label")).append("\n")
        panel.append_text(text(binder.example.strip("\n")))

    panel.rstrip()
    console.print(panel, soft_wrap=True)


__all__ = (
    "render",
)
