from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_EXTENSIONS: Tuple[str, ...] = ("ts", "tsx", "js", "jsx", "mjs", "cjs", "css", "py", "rs")

DEFAULT_DEV_MARKERS: Tuple[str, ...] = (
	"__tests__",
	"stories",
	".stories.",
	"story.",
	".test.",
	".spec.",
)


class ModgraphError(Exception):
	pass


class AnalysisError(ModgraphError):
	"""A source file could not be read; the whole root is abandoned."""

	def __init__(self, path: str, reason: str):
		super().__init__(f"Cannot analyze {path}: {reason}")
		self.path = path
		self.reason = reason


class OutputMode(str, Enum):
	HUMAN = "human"
	JSON = "json"
	JSONL = "jsonl"


class ImportKind(str, Enum):
	STATIC = "static"
	SIDE_EFFECT = "side-effect"


class ReexportKind(str, Enum):
	STAR = "star"
	NAMED = "named"


class ImportEntry(BaseModel):
	model_config = ConfigDict(frozen=True)

	source: str
	kind: ImportKind = ImportKind.STATIC
	resolved: Optional[str] = None


class ReexportEntry(BaseModel):
	model_config = ConfigDict(frozen=True)

	source: str
	kind: ReexportKind
	names: List[str] = []
	resolved: Optional[str] = None


class ExportSymbol(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	# provenance: decl, default, named, reexport, __all__, def, class
	kind: str


class CommandRef(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	line: int


class FileRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: str
	loc: int = 0
	imports: List[ImportEntry] = []
	reexports: List[ReexportEntry] = []
	dynamic_imports: List[str] = []
	exports: List[ExportSymbol] = []
	command_calls: List[CommandRef] = []
	command_handlers: List[CommandRef] = []


class DuplicateGroup(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	files: List[str]
	score: int
	prod_count: int
	dev_count: int
	canonical: str
	refactor_targets: List[str] = []


class CascadeEdge(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	from_file: str = Field(alias="from")
	to_file: str = Field(alias="to")


class DynamicImportSummary(BaseModel):
	model_config = ConfigDict(frozen=True)

	file: str
	sources: List[str]
	many_sources: bool = False
	self_import: bool = False


class CommandGap(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	locations: List[Tuple[str, int]] = []


class CommandCoverage(BaseModel):
	missing_handlers: List[CommandGap] = []
	unused_handlers: List[CommandGap] = []
	call_count: int = 0
	handler_count: int = 0


class GraphNode(BaseModel):
	id: str
	label: str
	loc: int = 0


class GraphEdge(BaseModel):
	source: str
	target: str
	kind: str


class GraphData(BaseModel):
	nodes: List[GraphNode] = []
	edges: List[GraphEdge] = []


class RootAnalysis(BaseModel):
	root: str
	records: List[FileRecord]
	export_index: Dict[str, List[str]] = {}
	duplicates: List[DuplicateGroup] = []
	ranked_duplicates: List[DuplicateGroup] = []
	cascades: List[CascadeEdge] = []
	dynamic_imports: List[DynamicImportSummary] = []
	coverage: CommandCoverage = CommandCoverage()

	@property
	def reexport_files(self) -> List[str]:
		return [r.path for r in self.records if r.reexports]


class Options(BaseModel):
	extensions: List[str] = list(DEFAULT_EXTENSIONS)
	ignore: List[str] = []
	output: OutputMode = OutputMode.HUMAN
	analyze_limit: int = Field(default=8, ge=1)
	report_path: Optional[str] = None
	editor_cmd: Optional[str] = None
	serve: bool = False
	open_report: bool = False
	dev_markers: List[str] = list(DEFAULT_DEV_MARKERS)
	prod_weight: int = Field(default=2, ge=0)
	dev_weight: int = Field(default=1, ge=0)

	@field_validator("extensions", mode="before")
	@classmethod
	def _normalize_extensions(cls, value):
		if isinstance(value, str):
			value = value.split(",")
		seen: List[str] = []
		for raw in value or []:
			ext = str(raw).strip().lstrip(".").lower()
			if ext and ext not in seen:
				seen.append(ext)
		return seen or list(DEFAULT_EXTENSIONS)
