#!/usr/bin/env python3
"""
Excel export of the updated BOQ (BOQ rows with the selected vendor and rate).
"""

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd
from openpyxl.utils import get_column_letter

from quote_compare.models import BOQItem, Selection

logger = logging.getLogger(__name__)

SHEET_NAME = 'Updated BOQ'

EXPORT_COLUMNS = {
    'Item': 10,
    'Description': 50,
    'Unit': 10,
    'Quantity': 10,
    'BaseRate': 12,
    'SelectedVendor': 20,
    'FinalRate': 12,
    'Total': 15,
}


def build_export_frame(boq_items: List[BOQItem], selections: List[Selection]) -> pd.DataFrame:
    """One row per BOQ item; vendor columns stay empty where nothing was selected"""
    by_item = {s.boq_item_id: s for s in selections}
    rows = []
    for item in boq_items:
        selection = by_item.get(item.id)
        rows.append({
            'Item': item.item_number,
            'Description': item.description,
            'Unit': item.unit,
            'Quantity': item.quantity,
            'BaseRate': item.base_rate if item.base_rate else '',
            'SelectedVendor': selection.selected_vendor if selection else '',
            'FinalRate': selection.final_rate if selection else '',
            'Total': round(item.quantity * selection.final_rate, 2) if selection else '',
        })
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))


def export_updated_boq(
    boq_items: List[BOQItem],
    selections: List[Selection],
    output_path: Union[str, Path]
) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = build_export_frame(boq_items, selections)
    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        worksheet = writer.sheets[SHEET_NAME]
        for idx, width in enumerate(EXPORT_COLUMNS.values(), start=1):
            worksheet.column_dimensions[get_column_letter(idx)].width = width

    logger.info(f"Exported {len(df)} BOQ rows to {output_path}")
    return output_path
