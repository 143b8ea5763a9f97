"""
Wires the client core together for a presentation layer.
What it does:
- Loads the stored draft and the plan history at startup
- Owns the draft object and the shared suggestion list
- Runs the analyze and upload pathways against the same history cache
- Clear / example actions

And, the main purpose:
One object a UI can hold; everything it renders is read from here.
"""


from typing import List, Optional

from planwise.api.client import PlanwiseClient
from planwise.db.storage import KeyValueStorage, SqlStorage
from planwise.flow.draft import DraftStore, PlanDraft
from planwise.flow.history import PlanHistory, PlanView
from planwise.flow.state import RequestState
from planwise.flow.submission import SubmissionMachine
from planwise.flow.upload import UploadPathway


class PlanwiseSession:
    def __init__(
        self,
        client: Optional[PlanwiseClient] = None,
        storage: Optional[KeyValueStorage] = None,
    ):
        self.client = client or PlanwiseClient()
        self.storage = storage if storage is not None else SqlStorage()
        self.drafts = DraftStore(self.storage)
        self.draft = PlanDraft()
        self.history = PlanHistory(self.client)
        self.analysis = SubmissionMachine(self.client, self.history, on_success=self._show_suggestions)
        self.uploads = UploadPathway(self.client, self.history, on_success=self._show_suggestions)
        self.suggestions: List[str] = []

    def _show_suggestions(self, suggestions: List[str]) -> None:
        # called when a pathway settles, before its history refresh
        self.suggestions = suggestions

    @property
    def error(self) -> str:
        return self.analysis.error

    @property
    def loading(self) -> bool:
        return self.analysis.state.is_pending

    @property
    def upload_summary(self) -> str:
        return self.uploads.summary

    def past_plans(self) -> List[PlanView]:
        return self.history.views()

    async def start(self) -> None:
        self.draft = await self.drafts.load()
        await self.history.refresh()

    async def save_draft(self) -> None:
        await self.drafts.save(self.draft)

    async def submit(self) -> RequestState:
        self.suggestions = []
        return await self.analysis.submit(self.draft)

    async def upload(self, file) -> Optional[RequestState]:
        return await self.uploads.upload_and_analyze(file)

    async def reset(self) -> None:
        self.draft.clear()
        self.suggestions = []
        self.analysis.reset()
        await self.drafts.discard()

    def load_example(self) -> None:
        self.draft.fill_example()

    async def aclose(self) -> None:
        if isinstance(self.storage, SqlStorage):
            await self.storage.aclose()
