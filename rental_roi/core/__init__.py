from .inputs import InputSet, DEFAULTS, read_inputs, validate_inputs
from .model import ROIResult, CashFlowRow, NPVResult, calc_roi, calc_npv, breakeven_year
from .storage import KeyValueStore, MappingStore, JsonFileStore
from .utils import fmt_currency, fmt_number, fmt_percent, fmt_years, npv

__all__ = [
	"InputSet",
	"DEFAULTS",
	"read_inputs",
	"validate_inputs",
	"ROIResult",
	"CashFlowRow",
	"NPVResult",
	"calc_roi",
	"calc_npv",
	"breakeven_year",
	"KeyValueStore",
	"MappingStore",
	"JsonFileStore",
	"fmt_currency",
	"fmt_number",
	"fmt_percent",
	"fmt_years",
	"npv",
]
