import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, ClassVar

from pdfvector import settings
from pdfvector.casting import (
    safe_int,
    safe_number,
    safe_number_list,
    safe_rect_list,
)
from pdfvector.pdfdevice import PDFDevice
from pdfvector.pdfexceptions import (
    NoCurrentPoint,
    OperandTypeMismatch,
    PDFEOFError,
    PDFException,
    PDFInterpreterError,
    PDFValueError,
    StackUnderflow,
    UnknownOperator,
)
from pdfvector.pdfoperator import (
    ARRAY,
    COLOR_COMPONENT,
    INTEGER,
    NAME,
    NAME_OR_DICTIONARY,
    NUMBER,
    PDFOperator,
    check_operands,
    operands,
)
from pdfvector.pdfpath import PDFPath
from pdfvector.pdfpattern import PDFPattern, get_pattern
from pdfvector.pdfstate import Color, PDFGraphicState, PDFStateStack
from pdfvector.pdftypes import (
    PDFStream,
    dict_value,
    get_inheritable,
    list_value,
    name_value,
    resolve1,
)
from pdfvector.pstypes import LIT, PSLiteral, literal_name
from pdfvector.utils import Matrix, Point, Rect

log = logging.getLogger(__name__)


class PDFResourceError(PDFInterpreterError):
    pass


LITERAL_FORM = LIT("Form")

# Number of nested form XObjects followed before giving up.
MAX_FORM_DEPTH = 32


class PDFDiagnostics:
    """Collects the problems found while interpreting content streams.

    Every problem is also logged, so a caller that only wants logging can
    ignore this object.
    """

    def __init__(self) -> None:
        self.issues: list[tuple[PDFOperator | None, PDFException]] = []

    def __repr__(self) -> str:
        return f"<PDFDiagnostics: {len(self.issues)} issues>"

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[tuple[PDFOperator | None, PDFException]]:
        return iter(self.issues)

    def report(
        self,
        op: PDFOperator | None,
        err: PDFException,
        level: int = logging.WARNING,
    ) -> None:
        self.issues.append((op, err))
        log.log(level, "%s: %s", type(err).__name__, err)

    def of_type(self, klass: type[PDFException]) -> list[PDFException]:
        return [err for (_, err) in self.issues if isinstance(err, klass)]


class PDFInterpretResult:
    """What an interpretation produced.

    path holds the geometry built but not yet painted when interpretation
    stopped. If the operand source failed, completed is False and error is
    the failure; everything before it has still been applied.
    """

    def __init__(
        self,
        path: PDFPath,
        diagnostics: PDFDiagnostics,
        error: BaseException | None = None,
    ) -> None:
        self.path = path
        self.diagnostics = diagnostics
        self.error = error

    def __repr__(self) -> str:
        return (
            f"<PDFInterpretResult: completed={self.completed!r}, "
            f"path={self.path!r}, "
            f"diagnostics={self.diagnostics!r}>"
        )

    @property
    def completed(self) -> bool:
        return self.error is None


class PDFResourceManager:
    """Repository of shared resources.

    Patterns referenced by several pages are resolved once, so the repaired
    pattern matrix is computed once per pattern object.
    """

    def __init__(self, caching: bool = True) -> None:
        self.caching = caching
        self._cached_patterns: dict[object, PDFPattern] = {}

    def get_pattern(
        self, objid: object, spec: object, name: str | None = None
    ) -> PDFPattern:
        if objid is not None and objid in self._cached_patterns:
            return self._cached_patterns[objid]
        log.debug("get_pattern: create: objid=%r, name=%r", objid, name)
        pattern = get_pattern(spec, name)
        if objid is not None and self.caching:
            self._cached_patterns[objid] = pattern
        return pattern


def _initial_color(colorspace: str) -> Color:
    if colorspace == "DeviceRGB":
        return (0.0, 0.0, 0.0)
    if colorspace == "DeviceCMYK":
        return (0.0, 0.0, 0.0, 1.0)
    return 0.0


class PDFPageInterpreter:
    """Processor for the content of a PDF page, form or pattern.

    Operators are dispatched by exact name to the do_* methods below. In
    method names "*" is spelled "_a", "'" is "_q" and '"' is "_w". The
    operands a method takes are declared with @operands.

    Reference: PDF Reference, Appendix A, Operator Summary
    """

    # Text and inline image operators; accepted but not interpreted.
    IGNORED_OPERATORS: ClassVar[frozenset[str]] = frozenset(
        {
            "BT",
            "ET",
            "Tc",
            "Tw",
            "Tz",
            "TL",
            "Tf",
            "Tr",
            "Ts",
            "Td",
            "TD",
            "Tm",
            "T*",
            "Tj",
            "TJ",
            "'",
            '"',
            "d0",
            "d1",
            "BI",
            "ID",
            "EI",
        }
    )

    def __init__(
        self,
        rsrcmgr: PDFResourceManager,
        device: PDFDevice,
        diagnostics: PDFDiagnostics | None = None,
    ) -> None:
        self.rsrcmgr = rsrcmgr
        self.device = device
        self.diagnostics = diagnostics if diagnostics is not None else PDFDiagnostics()
        self.handlers = self.get_handlers()
        # forms currently being executed, to detect circular references
        self._active_forms: list[int] = []
        self._terminal_error: BaseException | None = None
        self.init_resources({})
        self.init_state(Matrix.identity())

    @classmethod
    def get_handlers(cls) -> dict[str, str]:
        """Maps each operator name to the name of its handler method."""
        handlers = {}
        for attr in dir(cls):
            if attr.startswith("do_"):
                name = (
                    attr[3:].replace("_a", "*").replace("_w", '"').replace("_q", "'")
                )
                handlers[name] = attr
        return handlers

    def init_resources(self, resources: object) -> None:
        """Prepare the resource dictionary of the content stream."""
        self.resources: Mapping[str, Any] = dict_value(resources)
        self.patternmap: dict[str, PDFPattern] = {}

    def init_state(self, ctm: Matrix, path: PDFPath | None = None) -> None:
        """Initialize the graphic state stack for a new content stream."""
        self.path = path if path is not None else PDFPath()
        self.stack = PDFStateStack(ctm, self.path)
        # fill rule of a pending W/W*, applied by the next painting operator
        self.pending_clip: bool | None = None
        # nesting level of BX/EX compatibility sections
        self.compat_depth = 0
        self.device.set_ctm(ctm.copy())

    @property
    def graphicstate(self) -> PDFGraphicState:
        return self.stack.current

    @property
    def ctm(self) -> Matrix:
        return self.stack.current_ctm()

    def get_pattern(self, name: str) -> PDFPattern:
        if name not in self.patternmap:
            patterns = self._resource_dict("Pattern")
            if name not in patterns:
                raise PDFResourceError(f"Undefined pattern: {name!r}")
            spec = patterns[name]
            objid = getattr(spec, "objid", None)
            self.patternmap[name] = self.rsrcmgr.get_pattern(
                objid, resolve1(spec), name
            )
        return self.patternmap[name]

    def _resource_dict(self, category: str) -> Mapping[str, Any]:
        entries = self.resources.get(category)
        return dict_value(entries) if entries is not None else {}

    def get_resource(self, category: str, name: str) -> Any:
        entries = self._resource_dict(category)
        if name not in entries:
            raise PDFResourceError(f"Undefined {category} resource: {name!r}")
        return resolve1(entries[name])

    def dispatch(self, op: PDFOperator) -> bool:
        """Executes one operator.

        Returns False if the operator was skipped because of a recoverable
        error; the graphics state is then unchanged.
        """
        method = self.handlers.get(op.name)
        try:
            if method is None:
                if op.name in self.IGNORED_OPERATORS:
                    log.debug("ignore: %r", op)
                    return True
                raise UnknownOperator(f"Unknown operator: {op.name!r}")
            func = getattr(self, method)
            args = check_operands(
                op,
                getattr(func, "operand_kinds", ()),
                getattr(func, "operand_rest", None),
            )
            log.debug("exec: %s %r", op.name, args)
            func(*args)
        except PDFInterpreterError as err:
            if isinstance(err, UnknownOperator) and self.compat_depth:
                # BX/EX sections exist so newer operators can be skipped
                self.diagnostics.report(op, err, logging.DEBUG)
            elif settings.STRICT:
                raise
            else:
                self.diagnostics.report(op, err)
            return False
        return True

    def _require_current_point(self, operator: str) -> Point:
        point = self.stack.current_point()
        if point is None:
            raise NoCurrentPoint(f"Operator {operator!r} needs a current point")
        return point

    def _update_ctm(self) -> None:
        self.device.set_ctm(self.ctm.copy())

    # General graphics state

    def do_q(self) -> None:
        """Save graphics state"""
        self.stack.push()

    def do_Q(self) -> None:
        """Restore graphics state"""
        if not self.stack.pop():
            raise StackUnderflow("Q without matching q")
        self._update_ctm()

    @operands(NUMBER, NUMBER, NUMBER, NUMBER, NUMBER, NUMBER)
    def do_cm(
        self, a1: float, b1: float, c1: float, d1: float, e1: float, f1: float
    ) -> None:
        """Concatenate matrix to current transformation matrix"""
        self.stack.concatenate_ctm(Matrix(a1, b1, c1, d1, e1, f1))
        self._update_ctm()

    @operands(NUMBER)
    def do_w(self, linewidth: float) -> None:
        """Set line width"""
        self.graphicstate.linewidth = linewidth

    @operands(INTEGER)
    def do_J(self, linecap: int) -> None:
        """Set line cap style"""
        self.graphicstate.linecap = linecap

    @operands(INTEGER)
    def do_j(self, linejoin: int) -> None:
        """Set line join style"""
        self.graphicstate.linejoin = linejoin

    @operands(NUMBER)
    def do_M(self, miterlimit: float) -> None:
        """Set miter limit"""
        self.graphicstate.miterlimit = miterlimit

    @operands(ARRAY, NUMBER)
    def do_d(self, dash: list[object], phase: float) -> None:
        """Set line dash pattern"""
        dash_f = safe_number_list(dash)
        if dash_f is None:
            raise OperandTypeMismatch(f"Dash array must hold numbers: {dash!r}")
        self.graphicstate.dash = (dash_f, phase)

    @operands(NAME)
    def do_ri(self, intent: PSLiteral) -> None:
        """Set color rendering intent"""
        self.graphicstate.intent = literal_name(intent)

    @operands(NUMBER)
    def do_i(self, flatness: float) -> None:
        """Set flatness tolerance"""
        self.graphicstate.flatness = flatness

    @operands(NAME)
    def do_gs(self, name: PSLiteral) -> None:
        """Set parameters from graphics state parameter dictionary"""
        extgstate = dict_value(self.get_resource("ExtGState", literal_name(name)))
        gstate = self.graphicstate
        for key, value in extgstate.items():
            value = resolve1(value)
            if key == "LW" and safe_number(value) is not None:
                gstate.linewidth = float(value)
            elif key == "LC" and safe_int(value) is not None:
                gstate.linecap = int(value)
            elif key == "LJ" and safe_int(value) is not None:
                gstate.linejoin = int(value)
            elif key == "ML" and safe_number(value) is not None:
                gstate.miterlimit = float(value)
            elif key == "D":
                dash = list_value(value)
                dash_f = safe_number_list(resolve1(dash[0])) if dash else None
                phase = safe_number(dash[1]) if len(dash) > 1 else None
                if dash_f is not None and phase is not None:
                    gstate.dash = (dash_f, phase)
                else:
                    log.warning("Ignoring invalid /D entry %r in %r", value, name)
            elif key == "RI" and name_value(value) is not None:
                gstate.intent = name_value(value)
            elif key == "FL" and safe_number(value) is not None:
                gstate.flatness = float(value)
            else:
                log.debug("gs: skipping %r=%r", key, value)

    # Path construction

    @operands(NUMBER, NUMBER)
    def do_m(self, x: float, y: float) -> None:
        """Begin new subpath"""
        point = self.stack.to_device_space(x, y)
        self.path.move_to(*point)
        self.stack.set_current_point(*point)
        self.graphicstate.subpath_start = point

    @operands(NUMBER, NUMBER)
    def do_l(self, x: float, y: float) -> None:
        """Append straight line segment to path"""
        self._require_current_point("l")
        point = self.stack.to_device_space(x, y)
        self.path.line_to(*point)
        self.stack.set_current_point(*point)

    @operands(NUMBER, NUMBER, NUMBER, NUMBER, NUMBER, NUMBER)
    def do_c(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None:
        """Append curved segment to path (three control points)"""
        self._require_current_point("c")
        p1 = self.stack.to_device_space(x1, y1)
        p2 = self.stack.to_device_space(x2, y2)
        p3 = self.stack.to_device_space(x3, y3)
        self.path.curve_to(*p1, *p2, *p3)
        self.stack.set_current_point(*p3)

    @operands(NUMBER, NUMBER, NUMBER, NUMBER)
    def do_v(self, x2: float, y2: float, x3: float, y3: float) -> None:
        """Append curved segment to path (initial point replicated)

        The current point is both the start and the first control point.
        """
        p0 = self._require_current_point("v")
        p2 = self.stack.to_device_space(x2, y2)
        p3 = self.stack.to_device_space(x3, y3)
        self.path.curve_to(*p0, *p2, *p3)
        self.stack.set_current_point(*p3)

    @operands(NUMBER, NUMBER, NUMBER, NUMBER)
    def do_y(self, x1: float, y1: float, x3: float, y3: float) -> None:
        """Append curved segment to path (final point replicated)"""
        self._require_current_point("y")
        p1 = self.stack.to_device_space(x1, y1)
        p3 = self.stack.to_device_space(x3, y3)
        self.path.curve_to(*p1, *p3, *p3)
        self.stack.set_current_point(*p3)

    def do_h(self) -> None:
        """Close subpath"""
        self._require_current_point("h")
        self.path.close()
        start = self.graphicstate.subpath_start
        if start is not None:
            self.stack.set_current_point(*start)

    @operands(NUMBER, NUMBER, NUMBER, NUMBER)
    def do_re(self, x: float, y: float, w: float, h: float) -> None:
        """Append rectangle to path"""
        p0 = self.stack.to_device_space(x, y)
        self.path.move_to(*p0)
        self.path.line_to(*self.stack.to_device_space(x + w, y))
        self.path.line_to(*self.stack.to_device_space(x + w, y + h))
        self.path.line_to(*self.stack.to_device_space(x, y + h))
        self.path.close()
        self.stack.set_current_point(*p0)
        self.graphicstate.subpath_start = p0

    # Path painting

    def _close_if_open(self) -> None:
        if self.stack.current_point() is not None:
            self.path.close()

    def _paint(self, stroke: bool, fill: bool, evenodd: bool) -> None:
        segments = self.path.take()
        gstate = self.graphicstate
        if segments and (stroke or fill):
            self.device.paint_path(gstate, stroke, fill, evenodd, segments)
        if self.pending_clip is not None:
            if segments:
                gstate.clips.append((tuple(segments), self.pending_clip))
            self.pending_clip = None
        self.stack.clear_current_point(all_frames=True)

    def do_S(self) -> None:
        """Stroke path"""
        self._paint(True, False, False)

    def do_s(self) -> None:
        """Close and stroke path"""
        self._close_if_open()
        self._paint(True, False, False)

    def do_f(self) -> None:
        """Fill path using nonzero winding number rule"""
        self._paint(False, True, False)

    def do_F(self) -> None:
        """Fill path using nonzero winding number rule (obsolete)"""
        self.do_f()

    def do_f_a(self) -> None:
        """Fill path using even-odd rule"""
        self._paint(False, True, True)

    def do_B(self) -> None:
        """Fill and stroke path using nonzero winding number rule"""
        self._paint(True, True, False)

    def do_B_a(self) -> None:
        """Fill and stroke path using even-odd rule"""
        self._paint(True, True, True)

    def do_b(self) -> None:
        """Close, fill, and stroke path using nonzero winding number rule"""
        self._close_if_open()
        self._paint(True, True, False)

    def do_b_a(self) -> None:
        """Close, fill, and stroke path using even-odd rule"""
        self._close_if_open()
        self._paint(True, True, True)

    def do_n(self) -> None:
        """End path without filling or stroking"""
        self._paint(False, False, False)

    # Clipping

    def do_W(self) -> None:
        """Set clipping path using nonzero winding number rule"""
        self.pending_clip = False

    def do_W_a(self) -> None:
        """Set clipping path using even-odd rule"""
        self.pending_clip = True

    # Color

    @operands(NAME)
    def do_CS(self, name: PSLiteral) -> None:
        """Set color space for stroking operations"""
        self.graphicstate.scs = literal_name(name)
        self.graphicstate.scolor = _initial_color(self.graphicstate.scs)
        self.graphicstate.spattern = None

    @operands(NAME)
    def do_cs(self, name: PSLiteral) -> None:
        """Set color space for nonstroking operations"""
        self.graphicstate.ncs = literal_name(name)
        self.graphicstate.ncolor = _initial_color(self.graphicstate.ncs)
        self.graphicstate.npattern = None

    @operands(NUMBER)
    def do_G(self, gray: float) -> None:
        """Set gray level for stroking operations"""
        self.graphicstate.scolor = gray
        self.graphicstate.scs = "DeviceGray"

    @operands(NUMBER)
    def do_g(self, gray: float) -> None:
        """Set gray level for nonstroking operations"""
        self.graphicstate.ncolor = gray
        self.graphicstate.ncs = "DeviceGray"

    @operands(NUMBER, NUMBER, NUMBER)
    def do_RG(self, r: float, g: float, b: float) -> None:
        """Set RGB color for stroking operations"""
        self.graphicstate.scolor = (r, g, b)
        self.graphicstate.scs = "DeviceRGB"

    @operands(NUMBER, NUMBER, NUMBER)
    def do_rg(self, r: float, g: float, b: float) -> None:
        """Set RGB color for nonstroking operations"""
        self.graphicstate.ncolor = (r, g, b)
        self.graphicstate.ncs = "DeviceRGB"

    @operands(NUMBER, NUMBER, NUMBER, NUMBER)
    def do_K(self, c: float, m: float, y: float, k: float) -> None:
        """Set CMYK color for stroking operations"""
        self.graphicstate.scolor = (c, m, y, k)
        self.graphicstate.scs = "DeviceCMYK"

    @operands(NUMBER, NUMBER, NUMBER, NUMBER)
    def do_k(self, c: float, m: float, y: float, k: float) -> None:
        """Set CMYK color for nonstroking operations"""
        self.graphicstate.ncolor = (c, m, y, k)
        self.graphicstate.ncs = "DeviceCMYK"

    @staticmethod
    def _color_value(components: tuple[float, ...]) -> Color:
        if len(components) == 1:
            return components[0]
        return components

    def _pattern_color(
        self, components: tuple[Any, ...]
    ) -> tuple[Color, PDFPattern | None]:
        """Parses "c1 ... cn [/name]" operands of SCN and scn.

        Colored patterns (PaintType=1) take only the pattern name, uncolored
        ones (PaintType=2) take the base color components before it.
        """
        *values, last = components
        if any(isinstance(v, PSLiteral) for v in values):
            raise OperandTypeMismatch(
                f"Only the last color operand may be a name: {components!r}"
            )
        if not isinstance(last, PSLiteral):
            return self._color_value(components), None
        name = literal_name(last)
        pattern = self.get_pattern(name)
        if not values:
            return name, pattern
        return (tuple(values), name), pattern

    @operands(NUMBER, rest=NUMBER)
    def do_SC(self, *components: float) -> None:
        """Set color for stroking operations"""
        self.graphicstate.scolor = self._color_value(components)

    @operands(NUMBER, rest=NUMBER)
    def do_sc(self, *components: float) -> None:
        """Set color for nonstroking operations"""
        self.graphicstate.ncolor = self._color_value(components)

    @operands(COLOR_COMPONENT, rest=COLOR_COMPONENT)
    def do_SCN(self, *components: Any) -> None:
        """Set color for stroking operations, including patterns"""
        color, pattern = self._pattern_color(components)
        self.graphicstate.scolor = color
        self.graphicstate.spattern = pattern

    @operands(COLOR_COMPONENT, rest=COLOR_COMPONENT)
    def do_scn(self, *components: Any) -> None:
        """Set color for nonstroking operations, including patterns"""
        color, pattern = self._pattern_color(components)
        self.graphicstate.ncolor = color
        self.graphicstate.npattern = pattern

    # Shadings and external objects

    @operands(NAME)
    def do_sh(self, name: PSLiteral) -> None:
        """Paint area defined by shading pattern"""
        shading_name = literal_name(name)
        shading = self.get_resource("Shading", shading_name)
        self.device.paint_shading(shading_name, shading, self.ctm.copy())

    @operands(NAME)
    def do_Do(self, xobjid_arg: PSLiteral) -> None:
        """Invoke named XObject

        A form XObject runs like "q <Matrix> cm ... Q" with its own
        resources. It keeps building the same path object.
        """
        xobjid = literal_name(xobjid_arg)
        xobj = self.get_resource("XObject", xobjid)
        if not isinstance(xobj, PDFStream):
            log.warning("Ignoring XObject %r which is not a stream", xobjid)
            return
        subtype = xobj.get("Subtype")
        if subtype is not LITERAL_FORM and subtype != "Form":
            log.debug("Ignoring XObject %r of subtype %r", xobjid, subtype)
            return
        if id(xobj) in self._active_forms:
            log.warning("Refusing to execute circular reference to form %r", xobjid)
            return
        if len(self._active_forms) >= MAX_FORM_DEPTH:
            log.warning("Form %r nested too deeply, skipping", xobjid)
            return

        bbox: Rect | None = safe_rect_list(resolve1(xobj.get("BBox")))
        if bbox is None:
            log.warning("Ignoring form %r without a valid /BBox", xobjid)
            return
        matrix_spec = resolve1(xobj.get("Matrix"))
        matrix = (
            Matrix.identity() if matrix_spec is None else Matrix.from_array(matrix_spec)
        )
        # According to PDF reference 1.7 section 4.9.1, XObjects in
        # earlier PDFs (prior to v1.2) use the page's Resources entry
        # instead of having their own Resources entry.
        xobjres = xobj.get("Resources")
        resources = dict_value(xobjres) if xobjres else self.resources

        log.debug("Processing xobj: %r", xobj)
        saved = (self.resources, self.patternmap, self.pending_clip)
        depth = self.stack.depth
        self.stack.push()
        self.stack.concatenate_ctm(matrix)
        self._update_ctm()
        self.init_resources(resources)
        self.pending_clip = None
        self._active_forms.append(id(xobj))
        self.device.begin_figure(xobjid, bbox, matrix)
        try:
            self._run(xobj.get_operators())
        finally:
            self.device.end_figure(xobjid)
            self._active_forms.pop()
            (self.resources, self.patternmap, self.pending_clip) = saved
            # discard whatever the form left unbalanced
            while self.stack.depth > depth:
                self.stack.pop()
            self._update_ctm()

    # Marked content and compatibility sections

    def do_BX(self) -> None:
        """Begin compatibility section"""
        self.compat_depth += 1

    def do_EX(self) -> None:
        """End compatibility section"""
        self.compat_depth = max(0, self.compat_depth - 1)

    @operands(NAME)
    def do_MP(self, tag: PSLiteral) -> None:
        """Define marked-content point"""
        self.device.do_tag(tag)

    @operands(NAME, NAME_OR_DICTIONARY)
    def do_DP(self, tag: PSLiteral, props: object) -> None:
        """Define marked-content point with property list"""
        self.device.do_tag(tag, props)

    @operands(NAME)
    def do_BMC(self, tag: PSLiteral) -> None:
        """Begin marked-content sequence"""
        self.device.begin_tag(tag)

    @operands(NAME, NAME_OR_DICTIONARY)
    def do_BDC(self, tag: PSLiteral, props: object) -> None:
        """Begin marked-content sequence with property list"""
        self.device.begin_tag(tag, props)

    def do_EMC(self) -> None:
        """End marked-content sequence"""
        self.device.end_tag()

    # Entry points

    def _run(self, operators: Iterable[PDFOperator]) -> None:
        iterator = iter(operators)
        while self._terminal_error is None:
            try:
                op = next(iterator)
            except (StopIteration, PDFEOFError):
                break
            except OSError as err:
                log.warning("Content stream ended early: %s", err)
                self._terminal_error = err
                break
            self.dispatch(op)

    def execute(self, operators: Iterable[PDFOperator]) -> PDFInterpretResult:
        """Interprets operators in order against the current state.

        Stops at the end of the operand source or when reading it fails.
        """
        self._terminal_error = None
        self._run(operators)
        return PDFInterpretResult(
            self.path, self.diagnostics, error=self._terminal_error
        )

    def render_contents(
        self,
        resources: object,
        operators: Iterable[PDFOperator] | PDFStream,
        ctm: Matrix | None = None,
    ) -> PDFInterpretResult:
        """Render a content stream starting from the base CTM ctm."""
        log.debug("render_contents: resources=%r, ctm=%r", resources, ctm)
        self.init_resources(resources)
        self.init_state(ctm if ctm is not None else Matrix.identity())
        if isinstance(operators, PDFStream):
            operators = operators.get_operators()
        return self.execute(operators)

    def process_page(
        self,
        page: object,
        operators: Iterable[PDFOperator] | PDFStream,
    ) -> PDFInterpretResult:
        """Render a page dictionary.

        MediaBox, Rotate and Resources may be inherited from the page tree.
        """
        log.debug("Processing page: %r", page)
        mediabox = safe_rect_list(get_inheritable(page, "MediaBox"))
        if mediabox is None:
            if settings.STRICT:
                raise PDFValueError("Page has no valid /MediaBox")
            log.warning("Page has no valid /MediaBox, assuming US Letter")
            mediabox = (0, 0, 612, 792)
        (x0, y0, x1, y1) = mediabox
        rotate = (safe_int(get_inheritable(page, "Rotate")) or 0) % 360
        if rotate == 90:
            ctm = Matrix(0, -1, 1, 0, -y0, x1)
        elif rotate == 180:
            ctm = Matrix(-1, 0, 0, -1, x1, y1)
        elif rotate == 270:
            ctm = Matrix(0, 1, -1, 0, y1, -x0)
        else:
            ctm = Matrix(1, 0, 0, 1, -x0, -y0)
        resources = get_inheritable(page, "Resources") or {}
        self.device.begin_page(page, ctm.copy())
        result = self.render_contents(resources, operators, ctm=ctm)
        self.device.end_page(page)
        return result
