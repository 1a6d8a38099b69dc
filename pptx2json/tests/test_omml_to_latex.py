from unittest import TestCase

from pptx2json.extractors.omml_to_latex import find_omath, omml_to_latex

tc = TestCase()


def _run(text: str) -> str:
    return f"<m:r><m:rPr><m:sty m:val=\"p\"/></m:rPr><m:t>{text}</m:t></m:r>"


def _latex(parse_xml, body: str) -> str:
    return omml_to_latex(parse_xml(f"<m:oMath>{body}</m:oMath>"))


def test_plain_runs_and_symbols(parse_xml) -> None:
    tc.assertEqual("x+1", _latex(parse_xml, _run("x") + _run("+1")))
    tc.assertEqual("\\alpha +\\beta", _latex(parse_xml, _run("α+β")))


def test_fractions(parse_xml) -> None:
    fraction = f"<m:f><m:num>{_run('a')}</m:num><m:den>{_run('b')}</m:den></m:f>"
    linear = (
        '<m:f><m:fPr><m:type m:val="lin"/></m:fPr>'
        f"<m:num>{_run('a')}</m:num><m:den>{_run('b')}</m:den></m:f>"
    )

    tc.assertEqual("\\frac{a}{b}", _latex(parse_xml, fraction))
    tc.assertEqual("a/b", _latex(parse_xml, linear))


def test_scripts(parse_xml) -> None:
    tc.assertEqual(
        "{x}^{2}", _latex(parse_xml, f"<m:sSup><m:e>{_run('x')}</m:e><m:sup>{_run('2')}</m:sup></m:sSup>")
    )
    tc.assertEqual(
        "{x}_{i}", _latex(parse_xml, f"<m:sSub><m:e>{_run('x')}</m:e><m:sub>{_run('i')}</m:sub></m:sSub>")
    )
    tc.assertEqual(
        "{x}_{i}^{2}",
        _latex(
            parse_xml,
            f"<m:sSubSup><m:e>{_run('x')}</m:e><m:sub>{_run('i')}</m:sub>"
            f"<m:sup>{_run('2')}</m:sup></m:sSubSup>",
        ),
    )


def test_radicals(parse_xml) -> None:
    square = (
        '<m:rad><m:radPr><m:degHide m:val="1"/></m:radPr><m:deg/>'
        f"<m:e>{_run('x')}</m:e></m:rad>"
    )
    cube = f"<m:rad><m:deg>{_run('3')}</m:deg><m:e>{_run('x')}</m:e></m:rad>"

    tc.assertEqual("\\sqrt{x}", _latex(parse_xml, square))
    tc.assertEqual("\\sqrt[3]{x}", _latex(parse_xml, cube))


def test_nary(parse_xml) -> None:
    total = (
        '<m:nary><m:naryPr><m:chr m:val="∑"/></m:naryPr>'
        f"<m:sub>{_run('i=1')}</m:sub><m:sup>{_run('n')}</m:sup><m:e>{_run('i')}</m:e></m:nary>"
    )
    integral = f"<m:nary><m:sub/><m:sup/><m:e>{_run('f')}</m:e></m:nary>"

    tc.assertEqual("\\sum_{i=1}^{n} i", _latex(parse_xml, total))
    tc.assertEqual("\\int f", _latex(parse_xml, integral))


def test_delimiters(parse_xml) -> None:
    parens = f"<m:d><m:e>{_run('a')}</m:e><m:e>{_run('b')}</m:e></m:d>"
    braces = (
        '<m:d><m:dPr><m:begChr m:val="{"/><m:endChr m:val=""/></m:dPr>'
        f"<m:e>{_run('x')}</m:e></m:d>"
    )

    tc.assertEqual("\\left(a,b\\right)", _latex(parse_xml, parens))
    tc.assertEqual("\\left\\{x\\right.", _latex(parse_xml, braces))


def test_functions_accents_and_bars(parse_xml) -> None:
    func = f"<m:func><m:fName>{_run('sin')}</m:fName><m:e>{_run('x')}</m:e></m:func>"
    vector = f'<m:acc><m:accPr><m:chr m:val="⃗"/></m:accPr><m:e>{_run("v")}</m:e></m:acc>'
    hat = f"<m:acc><m:e>{_run('x')}</m:e></m:acc>"
    underline = f'<m:bar><m:barPr><m:pos m:val="bot"/></m:barPr><m:e>{_run("x")}</m:e></m:bar>'

    tc.assertEqual("\\sin{x}", _latex(parse_xml, func))
    tc.assertEqual("\\vec{v}", _latex(parse_xml, vector))
    tc.assertEqual("\\hat{x}", _latex(parse_xml, hat))
    tc.assertEqual("\\underline{x}", _latex(parse_xml, underline))


def test_matrix_and_limits(parse_xml) -> None:
    matrix = (
        f"<m:m><m:mr><m:e>{_run('a')}</m:e><m:e>{_run('b')}</m:e></m:mr>"
        f"<m:mr><m:e>{_run('c')}</m:e><m:e>{_run('d')}</m:e></m:mr></m:m>"
    )
    limit = f"<m:limLow><m:e>{_run('lim')}</m:e><m:lim>{_run('n→∞')}</m:lim></m:limLow>"

    tc.assertEqual("\\begin{matrix}a & b \\\\ c & d\\end{matrix}", _latex(parse_xml, matrix))
    tc.assertEqual("lim_{n\\rightarrow \\infty}", _latex(parse_xml, limit))


def test_nested_structures(parse_xml) -> None:
    body = (
        f"<m:rad><m:deg/><m:e><m:f><m:num>{_run('1')}</m:num>"
        f"<m:den><m:sSup><m:e>{_run('x')}</m:e><m:sup>{_run('2')}</m:sup></m:sSup></m:den>"
        "</m:f></m:e></m:rad>"
    )

    tc.assertEqual("\\sqrt{\\frac{1}{{x}^{2}}}", _latex(parse_xml, body))


def test_find_omath(parse_xml) -> None:
    para = parse_xml(
        f"<a:p><m:oMathPara><m:oMath>{_run('a')}</m:oMath><m:oMath>{_run('b')}</m:oMath>"
        "</m:oMathPara></a:p>"
    )

    formulas = find_omath(para)

    tc.assertEqual(["a", "b"], [omml_to_latex(formula) for formula in formulas])
    tc.assertEqual([], find_omath(parse_xml("<a:p/>")))
