"""
OOXML namespaces and small ElementTree lookup helpers.

Paths use the prefixes of NAMESPACES, e.g. ``find(node, "p:spPr/a:xfrm")``.
All helpers accept ``None`` as the starting node and return ``None``, so
lookups over an optional layout or master counterpart need no guards.
"""

from xml.etree import ElementTree as ET

NAMESPACES = {
    "p": "http://schemas.openxmlformats.org/presentationml/2006/main",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "m": "http://schemas.openxmlformats.org/officeDocument/2006/math",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "c": "http://schemas.openxmlformats.org/drawingml/2006/chart",
    "dgm": "http://schemas.openxmlformats.org/drawingml/2006/diagram",
    "dsp": "http://schemas.microsoft.com/office/drawing/2008/diagram",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}

P_NS = "{%s}" % NAMESPACES["p"]
A_NS = "{%s}" % NAMESPACES["a"]
R_NS = "{%s}" % NAMESPACES["r"]
M_NS = "{%s}" % NAMESPACES["m"]
MC_NS = "{%s}" % NAMESPACES["mc"]
C_NS = "{%s}" % NAMESPACES["c"]
DGM_NS = "{%s}" % NAMESPACES["dgm"]
DSP_NS = "{%s}" % NAMESPACES["dsp"]
REL_NS = "{%s}" % NAMESPACES["rel"]

# Shape tree node kinds
P_SP = f"{P_NS}sp"
P_CXNSP = f"{P_NS}cxnSp"
P_PIC = f"{P_NS}pic"
P_GRAPHICFRAME = f"{P_NS}graphicFrame"
P_GRPSP = f"{P_NS}grpSp"
P_NVGRPSPPR = f"{P_NS}nvGrpSpPr"
P_GRPSPPR = f"{P_NS}grpSpPr"
P_EXTLST = f"{P_NS}extLst"
MC_ALTERNATECONTENT = f"{MC_NS}AlternateContent"

R_ID = f"{R_NS}id"
R_EMBED = f"{R_NS}embed"
R_LINK = f"{R_NS}link"
R_DM = f"{R_NS}dm"

# graphicData URIs
TABLE_URI = "http://schemas.openxmlformats.org/drawingml/2006/table"
CHART_URI = "http://schemas.openxmlformats.org/drawingml/2006/chart"
DIAGRAM_URI = "http://schemas.openxmlformats.org/drawingml/2006/diagram"
OLE_URI = "http://schemas.openxmlformats.org/presentationml/2006/ole"

# EMU per point; every linear unit of the package is divided by this.
EMU_PER_POINT = 12700
# Angles are stored in 60000ths of a degree.
ANGLE_UNITS_PER_DEGREE = 60000


def local_name(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def find(node: ET.Element | None, path: str) -> ET.Element | None:
    if node is None:
        return None
    return node.find(path, NAMESPACES)


def findall(node: ET.Element | None, path: str) -> list[ET.Element]:
    if node is None:
        return []
    return node.findall(path, NAMESPACES)


def get_attr(node: ET.Element | None, path: str | None, name: str) -> str | None:
    """Return attribute ``name`` of the element at ``path`` below ``node``."""
    target = find(node, path) if path else node
    if target is None:
        return None
    return target.get(name)


def is_on(value: str | None) -> bool:
    """OOXML boolean attribute test ("1"/"true"/"on")."""
    return value in ("1", "true", "on")


def emu_to_points(value: str | int) -> float:
    return int(value) / EMU_PER_POINT


def children(node: ET.Element | None) -> list[ET.Element]:
    return list(node) if node is not None else []
