import asyncio
import logging
import random
from itertools import zip_longest

import pandas as pd
from rich.progress import (
    Progress,
    TextColumn,
    BarColumn,
    TimeRemainingColumn,
    TimeElapsedColumn,
    TaskProgressColumn,
)

from gender_api import config
from gender_api.genderWrapperAsync import GenderWrapperAsync

logger = logging.getLogger(__name__)


# gender-api.com returns one JSON object per name :
# {
#     "name": "markus",
#     "gender": "male",
#     "country": "DE",   # only present if localized
#     "samples": 150,
#     "accuracy": 99,
#     "duration": "44ms"
# }
# A multi-name query answers with a list of these (or {"result": [...]}).
def _as_records(response) -> list:
    if isinstance(response, list):
        return response
    if isinstance(response, dict) and isinstance(response.get('result'), list):
        return response['result']
    return [response]


def parse_response(responses: list, i_list) -> pd.DataFrame:
    """
    Flatten decoded responses into one row per name.
    i_list holds, for each response, the datasource indexes of the names it answers.
    When the counts differ every row is still kept, missing values left as None.
    """
    response_list = []
    for response, indexes in zip(responses, i_list):
        records = _as_records(response)
        if len(records) != len(indexes):
            logger.warning("Got %d records for %d names (indexes %s)", len(records), len(indexes), list(indexes))
        for idx, r_dict in zip_longest(indexes, records):
            if not isinstance(r_dict, dict):
                r_dict = {}
            response_list.append([
                idx,
                r_dict.get('name'),
                r_dict.get('gender'),
                r_dict.get('country'),
                'genderAPI.com',
                r_dict.get('accuracy'),
                r_dict.get('samples'),
                r_dict.get('duration'),
            ])

    return pd.DataFrame(response_list, columns=[
        'index',
        'namePassed',
        'predictedGender',
        'localization',
        'serviceUsed',
        'extraAccuracy',
        'extraSamples',
        'extraDuration',
    ])


async def run_batched(
    df: pd.DataFrame,
    column: str = 'firstName',
    batch_size: int = config.MAX_NAMES,
    pause_seconds: float = 60,
    wrapper_class=GenderWrapperAsync,
    country: str = None,
    jitter: tuple = (1, 5),
    **kwargs
) -> pd.DataFrame:
    """
    Look up every name of df[column], batch_size names per request (at most 100),
    with a cooldown between batches and rich visual progress bars.
    Extra kwargs go to wrapper_class (serverKey, session, ...).
    """
    batch_size = max(1, min(batch_size, config.MAX_NAMES))
    total = len(df)
    responses = []
    i_list = []

    progress = Progress(
        TextColumn("[bold blue]{task.description}[/]"),
        BarColumn(bar_width=40),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
    )

    with progress:
        overall_task = progress.add_task("Total progress", total=total)

        for start in range(0, total, batch_size):
            end = min(start + batch_size, total)
            batch_df = df.iloc[start:end]

            progress.log(f"[green]Processing rows {start}-{end}...[/green]")
            # one instance per batch, parameters would otherwise carry over
            wrapper = wrapper_class(**kwargs)
            if country is not None:
                wrapper.by_localization(country)

            # missing names are not sent
            batch_names = batch_df[column][~batch_df[column].isna()]
            if batch_names.empty:
                progress.log(f"[yellow]Rows {start}-{end} hold no name, skipped[/yellow]")
            else:
                names = [str(n) for n in batch_names.tolist()]
                response = await wrapper.check_name(names)
                if len(_as_records(response)) != len(names):
                    progress.log(f"[red]Rows {start}-{end}: {len(_as_records(response))} records for {len(names)} names[/red]")
                responses.append(response)
                i_list.append(list(batch_names.index))

            progress.update(overall_task, advance=len(batch_df))

            if end < total:
                sleep_time = pause_seconds + random.uniform(*jitter)
                progress.log(f"[yellow]Cooling down for {sleep_time:.1f}s to respect API limits...[/yellow]")

                cooldown_task = progress.add_task("Batch cooldown", total=sleep_time)
                start_time = asyncio.get_event_loop().time()

                while True:
                    elapsed = asyncio.get_event_loop().time() - start_time
                    progress.update(cooldown_task, completed=elapsed)
                    if elapsed >= sleep_time:
                        break
                    await asyncio.sleep(0.2)

                progress.remove_task(cooldown_task)

        progress.console.print("\n [bold green]All batches completed successfully![/bold green]")

    return parse_response(responses, i_list)
