"""
Office Math (OMML) to LaTeX conversion.

Structures are converted recursively, so fractions inside radicals or
scripts inside delimiters keep their nesting. Property containers (``*Pr``)
never produce output.
"""

from xml.etree import ElementTree as ET

from pptx2json.namespaces import M_NS, local_name

_M_VAL = f"{M_NS}val"

# Elements carrying formatting only
_PROPERTY_TAGS = frozenset(
    [
        "rPr",
        "fPr",
        "radPr",
        "ctrlPr",
        "oMathParaPr",
        "naryPr",
        "dPr",
        "sSupPr",
        "sSubPr",
        "sSubSupPr",
        "funcPr",
        "accPr",
        "barPr",
        "mPr",
        "eqArrPr",
        "limLowPr",
        "limUppPr",
        "groupChrPr",
        "boxPr",
        "borderBoxPr",
        "sPrePr",
        "degHide",
    ]
)

_GREEK_AND_SYMBOLS = {
    "α": "\\alpha",
    "β": "\\beta",
    "γ": "\\gamma",
    "δ": "\\delta",
    "ε": "\\epsilon",
    "ζ": "\\zeta",
    "η": "\\eta",
    "θ": "\\theta",
    "ι": "\\iota",
    "κ": "\\kappa",
    "λ": "\\lambda",
    "μ": "\\mu",
    "ν": "\\nu",
    "ξ": "\\xi",
    "π": "\\pi",
    "ρ": "\\rho",
    "σ": "\\sigma",
    "τ": "\\tau",
    "υ": "\\upsilon",
    "φ": "\\varphi",
    "χ": "\\chi",
    "ψ": "\\psi",
    "ω": "\\omega",
    "Γ": "\\Gamma",
    "Δ": "\\Delta",
    "Θ": "\\Theta",
    "Λ": "\\Lambda",
    "Ξ": "\\Xi",
    "Π": "\\Pi",
    "Σ": "\\Sigma",
    "Φ": "\\Phi",
    "Ψ": "\\Psi",
    "Ω": "\\Omega",
    "∞": "\\infty",
    "±": "\\pm",
    "∓": "\\mp",
    "×": "\\times",
    "÷": "\\div",
    "·": "\\cdot",
    "≤": "\\leq",
    "≥": "\\geq",
    "≠": "\\neq",
    "≈": "\\approx",
    "≡": "\\equiv",
    "∈": "\\in",
    "∉": "\\notin",
    "⊂": "\\subset",
    "⊆": "\\subseteq",
    "∪": "\\cup",
    "∩": "\\cap",
    "∀": "\\forall",
    "∃": "\\exists",
    "∂": "\\partial",
    "∇": "\\nabla",
    "→": "\\rightarrow",
    "←": "\\leftarrow",
    "⇒": "\\Rightarrow",
    "⇔": "\\Leftrightarrow",
}

_NARY_OPERATORS = {
    "∑": "\\sum",
    "∏": "\\prod",
    "∐": "\\coprod",
    "∫": "\\int",
    "∬": "\\iint",
    "∭": "\\iiint",
    "∮": "\\oint",
    "⋃": "\\bigcup",
    "⋂": "\\bigcap",
}

_ACCENTS = {
    "̂": "\\hat",
    "̃": "\\tilde",
    "̄": "\\bar",
    "̅": "\\overline",
    "⃗": "\\vec",
    "̇": "\\dot",
    "̈": "\\ddot",
    "̌": "\\check",
    "́": "\\acute",
    "̀": "\\grave",
}

_FUNCTIONS = frozenset(
    ["sin", "cos", "tan", "cot", "sec", "csc", "log", "ln", "exp", "lim", "max", "min"]
)

_DELIMITERS = {
    "{": "\\{",
    "}": "\\}",
    "‖": "\\|",
    "⌈": "\\lceil",
    "⌉": "\\rceil",
    "⌊": "\\lfloor",
    "⌋": "\\rfloor",
    "〈": "\\langle",
    "〉": "\\rangle",
}


def _child(elem: ET.Element, name: str) -> ET.Element | None:
    return elem.find(f"{M_NS}{name}")


def _property(elem: ET.Element, path: str) -> str | None:
    """Read ``m:val`` of a property element, e.g. ``naryPr/chr``."""
    node = elem.find("/".join(f"{M_NS}{part}" for part in path.split("/")))
    if node is None:
        return None
    return node.get(_M_VAL)


def _symbols(text: str) -> str:
    out = []
    for char in text:
        symbol = _GREEK_AND_SYMBOLS.get(char)
        if symbol is None:
            out.append(char)
        else:
            out.append(symbol + " ")
    return "".join(out)


def _convert_children(elem: ET.Element | None) -> str:
    if elem is None:
        return ""
    return "".join(_convert(child) for child in elem).strip()


def _delimiter(char: str | None, default: str) -> str:
    if char is None:
        char = default
    if not char:
        return "."
    return _DELIMITERS.get(char, char)


def _convert(elem: ET.Element) -> str:
    tag = local_name(elem.tag)

    if tag in _PROPERTY_TAGS:
        return ""

    if tag == "t":
        return _symbols(elem.text or "")

    if tag == "f":
        num = _convert_children(_child(elem, "num"))
        den = _convert_children(_child(elem, "den"))
        if _property(elem, "fPr/type") == "lin":
            return f"{num}/{den}"
        return f"\\frac{{{num}}}{{{den}}}"

    if tag == "sSup":
        base = _convert_children(_child(elem, "e"))
        sup = _convert_children(_child(elem, "sup"))
        return f"{{{base}}}^{{{sup}}}"

    if tag == "sSub":
        base = _convert_children(_child(elem, "e"))
        sub = _convert_children(_child(elem, "sub"))
        return f"{{{base}}}_{{{sub}}}"

    if tag == "sSubSup":
        base = _convert_children(_child(elem, "e"))
        sub = _convert_children(_child(elem, "sub"))
        sup = _convert_children(_child(elem, "sup"))
        return f"{{{base}}}_{{{sub}}}^{{{sup}}}"

    if tag == "sPre":
        base = _convert_children(_child(elem, "e"))
        sub = _convert_children(_child(elem, "sub"))
        sup = _convert_children(_child(elem, "sup"))
        return f"{{}}_{{{sub}}}^{{{sup}}}{{{base}}}"

    if tag == "rad":
        content = _convert_children(_child(elem, "e"))
        degree = _convert_children(_child(elem, "deg"))
        if degree:
            return f"\\sqrt[{degree}]{{{content}}}"
        return f"\\sqrt{{{content}}}"

    if tag == "nary":
        op = _property(elem, "naryPr/chr") or "∫"
        result = _NARY_OPERATORS.get(op, op)
        sub = _convert_children(_child(elem, "sub"))
        sup = _convert_children(_child(elem, "sup"))
        if sub:
            result += f"_{{{sub}}}"
        if sup:
            result += f"^{{{sup}}}"
        return f"{result} {_convert_children(_child(elem, 'e'))}"

    if tag == "d":
        left = _delimiter(_property(elem, "dPr/begChr"), "(")
        right = _delimiter(_property(elem, "dPr/endChr"), ")")
        separator = _property(elem, "dPr/sepChr") or ","
        content = separator.join(
            _convert_children(e) for e in elem.findall(f"{M_NS}e")
        )
        return f"\\left{left}{content}\\right{right}"

    if tag == "func":
        name = _convert_children(_child(elem, "fName"))
        content = _convert_children(_child(elem, "e"))
        if name in _FUNCTIONS:
            name = f"\\{name}"
        return f"{name}{{{content}}}"

    if tag == "acc":
        accent = _property(elem, "accPr/chr") or "̂"
        command = _ACCENTS.get(accent, "\\hat")
        return f"{command}{{{_convert_children(_child(elem, 'e'))}}}"

    if tag == "bar":
        content = _convert_children(_child(elem, "e"))
        if _property(elem, "barPr/pos") == "bot":
            return f"\\underline{{{content}}}"
        return f"\\overline{{{content}}}"

    if tag == "groupChr":
        content = _convert_children(_child(elem, "e"))
        if _property(elem, "groupChrPr/pos") == "top":
            return f"\\overbrace{{{content}}}"
        return f"\\underbrace{{{content}}}"

    if tag == "limLow":
        base = _convert_children(_child(elem, "e"))
        limit = _convert_children(_child(elem, "lim"))
        return f"{base}_{{{limit}}}"

    if tag == "limUpp":
        base = _convert_children(_child(elem, "e"))
        limit = _convert_children(_child(elem, "lim"))
        return f"{base}^{{{limit}}}"

    if tag == "m":
        rows = []
        for mr in elem.findall(f"{M_NS}mr"):
            cells = [_convert_children(e) for e in mr.findall(f"{M_NS}e")]
            rows.append(" & ".join(cells))
        return "\\begin{matrix}" + " \\\\ ".join(rows) + "\\end{matrix}"

    if tag == "eqArr":
        rows = [_convert_children(e) for e in elem.findall(f"{M_NS}e")]
        return "\\begin{array}{l}" + " \\\\ ".join(rows) + "\\end{array}"

    if tag == "borderBox":
        return f"\\boxed{{{_convert_children(_child(elem, 'e'))}}}"

    # r, e, box, oMath and other containers
    return "".join(_convert(child) for child in elem)


def omml_to_latex(omath_element: ET.Element) -> str:
    """
    Convert an ``m:oMath`` (or ``m:oMathPara``) element to LaTeX.

    Args:
        omath_element: The math element.

    Returns:
        The LaTeX source, without surrounding math delimiters.
    """
    return "".join(_convert(child) for child in omath_element).strip()


def find_omath(node: ET.Element) -> list[ET.Element]:
    """All ``m:oMath`` descendants of ``node`` in document order."""
    return list(node.iter(f"{M_NS}oMath"))
