"""
Academic Body Counter - Desktop GUI Application
"""

import tkinter as tk
from tkinter import ttk, filedialog, messagebox, scrolledtext
import os
import sys
import threading
import traceback
import csv
import datetime
import pyperclip

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bodycount import BodyCountPipeline, PipelineConfig, CitationSelection
from bodycount.readers import DocumentUnreadable, read_document

GENERIC_ERROR = "Something went wrong while counting. Please try again."
NO_TEXT_ERROR = "Paste your text to count body words."
NO_DOCUMENT_ERROR = "Open a document to count body words."


class BodyCounterApp:
    def __init__(self, root):
        self.root = root
        self.root.title("Academic Body Counter")
        self.root.geometry("1280x820")
        self.root.minsize(960, 640)

        self.style = ttk.Style()
        self.style.theme_use('clam')

        # --- Modern Flat Theme Colors ---
        self.bg_app = "#fafafa"         # Overall App Background (Light Grey)
        self.bg_card = "#ffffff"        # Card Background (White)
        self.primary_color = "#0969da"  # Primary Action Blue
        self.text_color = "#333333"     # Dark Text
        self.text_muted = "#666666"     # Muted Text
        self.excluded_color = "#8c959f"
        self.included_color = "#1a7f37"

        # --- Style Configuration ---
        self.style.configure("TFrame", background=self.bg_app)
        self.style.configure("Sidebar.TFrame", background=self.bg_app)
        self.style.configure("Card.TFrame", background=self.bg_card, relief="solid", borderwidth=1)

        # Typography
        self.style.configure("TLabel", background=self.bg_app, foreground=self.text_color, font=("Segoe UI", 9))
        self.style.configure("Card.TLabel", background=self.bg_card, foreground=self.text_color, font=("Segoe UI", 9))
        self.style.configure("Metric.TLabel", background=self.bg_card, foreground=self.primary_color, font=("Segoe UI", 22, "bold"))
        self.style.configure("Header.TLabel", background=self.bg_app, foreground=self.text_color, font=("Segoe UI", 12, "bold"))
        self.style.configure("Status.TLabel", background=self.bg_app, foreground=self.text_muted, font=("Segoe UI", 8))
        self.style.configure("Section.TLabel", background=self.bg_app, foreground=self.text_muted, font=("Segoe UI", 9, "bold"))
        self.style.configure("TCheckbutton", background=self.bg_app)
        self.style.configure("TRadiobutton", background=self.bg_app)

        # Buttons - Secondary (Default)
        self.style.configure("TButton",
                             background=self.bg_card,
                             foreground=self.text_color,
                             borderwidth=1,
                             relief="solid",
                             padding=6,
                             font=("Segoe UI", 9))
        self.style.map("TButton",
                       background=[("active", "#f0f0f0"), ("pressed", "#e5e5e5")])

        # Buttons - Primary (Solid Color)
        self.style.configure("Primary.TButton",
                             background=self.primary_color,
                             foreground="#ffffff",
                             borderwidth=0,
                             relief="flat",
                             padding=8,
                             font=("Segoe UI", 10, "bold"))
        self.style.map("Primary.TButton",
                       background=[("active", "#085dc0"), ("pressed", "#0750a4")])

        # Tables / Treeview
        self.style.configure("Treeview",
                             background="white",
                             fieldbackground="white",
                             foreground=self.text_color,
                             rowheight=26,
                             font=("Segoe UI", 9),
                             borderwidth=0)
        self.style.configure("Treeview.Heading",
                             font=("Segoe UI", 9, "bold"),
                             background=self.bg_app,
                             foreground=self.text_color,
                             relief="flat")

        # Tabs
        self.style.configure("TNotebook", background=self.bg_app, borderwidth=0)
        self.style.configure("TNotebook.Tab",
                             background=self.bg_app,
                             foreground=self.text_muted,
                             padding=[16, 8],
                             borderwidth=0,
                             font=("Segoe UI", 10))
        self.style.map("TNotebook.Tab",
                       background=[("selected", self.bg_card)],
                       foreground=[("selected", self.primary_color)])

        self.document_path = None
        self.result = None
        self.selection = None
        self._last_debug_bundle = None
        self._worker_running = False
        self._job_id = 0  # monotonic counter; stale after() callbacks are discarded

        # Minimal file log (no console needed)
        self._log_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app.log")

        self.var_source = tk.StringVar(value="text")
        self.var_headings_only = tk.BooleanVar(value=False)
        self.var_search = tk.StringVar()
        self.status_var = tk.StringVar(value="Awaiting input")

        self._create_ui()

    def _create_ui(self):
        self.sidebar = ttk.Frame(self.root, style="Sidebar.TFrame", width=300)
        self.sidebar.pack(side=tk.LEFT, fill=tk.Y)
        self.sidebar.pack_propagate(False)

        # App Title / Brand
        title_frame = ttk.Frame(self.sidebar, style="Sidebar.TFrame")
        title_frame.pack(fill=tk.X, padx=20, pady=(24, 16))
        ttk.Label(title_frame, text="Body Counter", style="Header.TLabel", font=("Segoe UI", 16, "bold")).pack(anchor=tk.W)
        ttk.Label(title_frame, text="Citations, tables and references excluded", style="Status.TLabel").pack(anchor=tk.W)

        # --- Source ---
        ttk.Label(self.sidebar, text="SOURCE", style="Section.TLabel").pack(anchor=tk.W, padx=20, pady=(8, 4))
        ttk.Radiobutton(self.sidebar, text="Pasted text", value="text", variable=self.var_source).pack(anchor=tk.W, padx=20)
        ttk.Radiobutton(self.sidebar, text="Document (.docx / .pdf / .txt)", value="document",
                        variable=self.var_source).pack(anchor=tk.W, padx=20)

        self.btn_open = ttk.Button(self.sidebar, text="Open Document...", command=self._browse_file)
        self.btn_open.pack(fill=tk.X, padx=20, pady=(8, 2))
        self.lbl_file_status = ttk.Label(self.sidebar, text="No document", style="Status.TLabel")
        self.lbl_file_status.pack(anchor=tk.W, padx=20)

        ttk.Checkbutton(self.sidebar, text="Headings only (no fallback start)",
                        variable=self.var_headings_only).pack(anchor=tk.W, padx=20, pady=(8, 0))

        actions = ttk.Frame(self.sidebar, style="Sidebar.TFrame")
        actions.pack(fill=tk.X, padx=20, pady=12)
        self.btn_count = ttk.Button(actions, text="Count", style="Primary.TButton", command=self._count)
        self.btn_count.pack(fill=tk.X)
        row = ttk.Frame(actions, style="Sidebar.TFrame")
        row.pack(fill=tk.X, pady=(6, 0))
        self.btn_clear = ttk.Button(row, text="Clear", command=self._clear)
        self.btn_clear.pack(side=tk.LEFT, expand=True, fill=tk.X, padx=(0, 3))
        self.btn_cancel = ttk.Button(row, text="Cancel", command=self._cancel_task, state=tk.DISABLED)
        self.btn_cancel.pack(side=tk.LEFT, expand=True, fill=tk.X, padx=(3, 0))

        # --- Results card ---
        ttk.Label(self.sidebar, text="RESULT", style="Section.TLabel").pack(anchor=tk.W, padx=20, pady=(8, 4))
        card = ttk.Frame(self.sidebar, style="Card.TFrame", padding=12)
        card.pack(fill=tk.X, padx=20)
        ttk.Label(card, text="Body words", style="Card.TLabel").pack(anchor=tk.W)
        self.lbl_word_count = ttk.Label(card, text="0", style="Metric.TLabel")
        self.lbl_word_count.pack(anchor=tk.W)
        self.lbl_details = ttk.Label(card, text="Waiting for input", style="Card.TLabel", justify=tk.LEFT)
        self.lbl_details.pack(anchor=tk.W, pady=(6, 0))

        export = ttk.Frame(self.sidebar, style="Sidebar.TFrame")
        export.pack(fill=tk.X, padx=20, pady=12)
        self.btn_copy = ttk.Button(export, text="Copy Body Text", command=self._copy_to_clipboard, state=tk.DISABLED)
        self.btn_copy.pack(fill=tk.X, pady=2)
        self.btn_save = ttk.Button(export, text="Save Body Text...", command=self._save_text, state=tk.DISABLED)
        self.btn_save.pack(fill=tk.X, pady=2)
        self.btn_export_refs = ttk.Button(export, text="Export Citations (CSV)...", command=self._export_citations, state=tk.DISABLED)
        self.btn_export_refs.pack(fill=tk.X, pady=2)

        ttk.Label(self.sidebar, textvariable=self.status_var, style="Status.TLabel", wraplength=260).pack(
            side=tk.BOTTOM, anchor=tk.W, padx=20, pady=12)

        # --- Main area ---
        main = ttk.Frame(self.root)
        main.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 16), pady=16)
        self.notebook = ttk.Notebook(main)
        self.notebook.pack(fill=tk.BOTH, expand=True)

        tab_input = ttk.Frame(self.notebook)
        self.notebook.add(tab_input, text="Paste Text")
        self.txt_input = scrolledtext.ScrolledText(tab_input, wrap=tk.WORD, font=("Segoe UI", 11),
                                                   relief="flat", padx=12, pady=12)
        self.txt_input.pack(fill=tk.BOTH, expand=True)

        tab_body = ttk.Frame(self.notebook)
        self.notebook.add(tab_body, text="Body Text")
        self.txt_output = scrolledtext.ScrolledText(tab_body, wrap=tk.WORD, font=("Segoe UI", 11),
                                                    relief="flat", padx=12, pady=12)
        self.txt_output.pack(fill=tk.BOTH, expand=True)

        tab_refs = ttk.Frame(self.notebook)
        self.notebook.add(tab_refs, text="Citations")
        search_row = ttk.Frame(tab_refs)
        search_row.pack(fill=tk.X, pady=(8, 4))
        ttk.Label(search_row, text="Search:").pack(side=tk.LEFT, padx=(4, 6))
        search_entry = ttk.Entry(search_row, textvariable=self.var_search)
        search_entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        search_entry.bind("<KeyRelease>", lambda e: self._refresh_citation_tree())
        ttk.Button(search_row, text="Exclude All", command=lambda: self._set_all(True)).pack(side=tk.LEFT, padx=4)
        ttk.Button(search_row, text="Include All", command=lambda: self._set_all(False)).pack(side=tk.LEFT)

        columns = ("state", "citation", "words", "count")
        self.tree_refs = ttk.Treeview(tab_refs, columns=columns, show="headings", selectmode="browse")
        self.tree_refs.heading("state", text="State")
        self.tree_refs.heading("citation", text="Citation")
        self.tree_refs.heading("words", text="Words")
        self.tree_refs.heading("count", text="Count")
        self.tree_refs.column("state", width=90, anchor=tk.W, stretch=False)
        self.tree_refs.column("citation", width=520, anchor=tk.W)
        self.tree_refs.column("words", width=70, anchor=tk.E, stretch=False)
        self.tree_refs.column("count", width=70, anchor=tk.E, stretch=False)
        self.tree_refs.tag_configure("excluded", foreground=self.excluded_color)
        self.tree_refs.tag_configure("included", foreground=self.included_color)
        self.tree_refs.pack(fill=tk.BOTH, expand=True)
        self.tree_refs.bind("<Double-1>", self._on_ref_double_click)
        self.tree_refs.bind("<space>", self._on_ref_double_click)

        self.lbl_ref_status = ttk.Label(tab_refs, text="Run a count to list citations.", style="Status.TLabel")
        self.lbl_ref_status.pack(anchor=tk.W, padx=4, pady=6)

    # --- Background work ---

    def _report_bg_error(self, kind: str, error: Exception, tb_str: str):
        """Unified background error reporting (main thread only)."""
        short = str(error) if error is not None else "Unknown error"
        self._log(f"ERROR kind={kind} msg={short}\n{tb_str or ''}")
        self.status_var.set(f"{kind} failed: {short}")

    def _start_bg_task(self, kind: str, job_id: int, compute_fn, done_fn):
        """
        Run compute_fn() on a daemon thread.
        All UI updates must happen in done_fn (called on main thread).
        Any exception is caught and routed as (None, error, traceback) into done_fn.
        """
        def worker():
            try:
                payload = compute_fn()
                self.root.after(0, lambda: done_fn(payload, None, "", job_id))
            except Exception as e:
                tb = traceback.format_exc()
                self.root.after(0, lambda: done_fn(None, e, tb, job_id))
        threading.Thread(target=worker, daemon=True).start()

    def _log(self, msg: str):
        """Append one timestamped line to app.log (no console needed)."""
        try:
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(f"{datetime.datetime.now():%Y-%m-%d %H:%M:%S}  {msg}\n")
        except OSError:
            pass

    def _set_busy(self, busy: bool):
        """Enable/disable action buttons during background work."""
        state = tk.DISABLED if busy else tk.NORMAL
        for btn in (self.btn_open, self.btn_count, self.btn_clear):
            btn.config(state=state)
        self.btn_cancel.config(state=tk.NORMAL if busy else tk.DISABLED)
        self._worker_running = busy

    def _cancel_task(self):
        """Soft-cancel: invalidate current job_id; UI becomes interactive immediately."""
        if not self._worker_running:
            return
        self._job_id += 1
        self._set_busy(False)
        self.status_var.set("Cancelled.")
        self._log("CANCEL job_id advanced; pending callbacks will be discarded")

    # --- Actions ---

    def _browse_file(self):
        if self._worker_running:
            self.status_var.set("Cannot switch files while a task is running.")
            return
        path = filedialog.askopenfilename(filetypes=[
            ("Documents", "*.docx *.pdf *.txt *.md"),
            ("Word", "*.docx"),
            ("PDF", "*.pdf"),
            ("Text", "*.txt *.md"),
        ])
        if path:
            self._job_id += 1
            self.document_path = path
            self.var_source.set("document")
            self.lbl_file_status.config(text=os.path.basename(path))
            self.status_var.set("Document selected. Press Count.")
            self._log(f"OPEN path={path}")

    def _count(self):
        if self._worker_running:
            self.status_var.set("A task is already running...")
            return

        source = self.var_source.get()
        text = self.txt_input.get("1.0", "end-1c")
        path = self.document_path
        if source == "text" and not text.strip():
            self.status_var.set(NO_TEXT_ERROR)
            return
        if source == "document" and not path:
            self.status_var.set(NO_DOCUMENT_ERROR)
            return

        config = PipelineConfig.headings_only() if self.var_headings_only.get() else PipelineConfig.default()

        self._job_id += 1
        my_job = self._job_id
        self._set_busy(True)
        self.status_var.set("Counting...")

        def compute():
            """Run the pipeline (no Tk widget access)."""
            if my_job != self._job_id:
                return None
            pipeline = BodyCountPipeline(config)
            if source == "text":
                return pipeline.run_text(text)
            content = read_document(path)
            if isinstance(content, str):
                return pipeline.run_text(content)
            return pipeline.run_blocks(content)

        self._start_bg_task("COUNT", my_job, compute, self._count_done)

    def _count_done(self, payload, error, tb_str="", job_id=None):
        """Populate UI with the result (main thread)."""
        # Discard stale callback (user switched file / re-triggered)
        if job_id is not None and job_id != self._job_id:
            return
        self._set_busy(False)

        if error:
            self._report_bg_error("COUNT", error, tb_str)
            message = GENERIC_ERROR
            if isinstance(error, DocumentUnreadable):
                message = f"{GENERIC_ERROR}\n\n{error}"
            messagebox.showerror("Error", message)
            return
        if payload is None:
            # Cancelled/superseded. Nothing to do.
            return

        result, debug_bundle = payload
        self.result = result
        self.selection = CitationSelection(result)
        self._last_debug_bundle = debug_bundle

        self.txt_output.delete("1.0", tk.END)
        self.txt_output.insert("1.0", result.body_text)
        self._refresh_citation_tree()
        self._refresh_metrics()

        has_body = bool(result.body_text)
        self.btn_copy.config(state=tk.NORMAL if has_body else tk.DISABLED)
        self.btn_save.config(state=tk.NORMAL if has_body else tk.DISABLED)
        self.btn_export_refs.config(state=tk.NORMAL if result.citations else tk.DISABLED)

        self.status_var.set("Ready")
        self._log(f"COUNT words={result.word_count} raw={result.raw_word_count} "
                  f"citations={result.citation_count} tables={result.table_count} "
                  f"started_by={result.started_by}")

    def _refresh_metrics(self):
        if self.result is None:
            self.lbl_word_count.config(text="0")
            self.lbl_details.config(text="Waiting for input")
            return
        r = self.result
        sel = self.selection
        self.lbl_word_count.config(text=f"{sel.adjusted_word_count:,}")
        start = r.started_by if not r.start_heading else f"{r.started_by} ({r.start_heading})"
        self.lbl_details.config(text=(
            f"Raw words: {r.raw_word_count:,}\n"
            f"Excluded items: {sel.excluded_total:,}\n"
            f"Citations: {r.citation_count:,}  ·  Tables: {r.table_count}\n"
            f"Started by: {start}\n"
            f"Ended at: {r.end_heading or '-'}"
        ))
        self.lbl_ref_status.config(text=(
            f"Unique citations: {sel.unique_count}  |  "
            f"Excluded: {sel.excluded_count}  |  Included: {sel.included_count}"
        ))

    def _refresh_citation_tree(self):
        self.tree_refs.delete(*self.tree_refs.get_children())
        if self.selection is None:
            return
        entries = self.selection.filter(self.var_search.get())
        for entry in entries:
            excluded = self.selection.is_excluded(entry.text)
            self.tree_refs.insert("", tk.END, iid=entry.text, values=(
                "Excluded" if excluded else "Included",
                entry.text,
                entry.words,
                entry.occurrences,
            ), tags=("excluded" if excluded else "included",))
        if not entries:
            self.lbl_ref_status.config(text="No citations detected yet." if self.result else "Run a count to list citations.")

    def _on_ref_double_click(self, event):
        if self.selection is None:
            return
        item = self.tree_refs.focus()
        if not item:
            return
        self.selection.toggle(item)
        self._refresh_citation_tree()
        self.tree_refs.focus(item)
        self.tree_refs.selection_set(item)
        self._refresh_metrics()

    def _set_all(self, excluded: bool):
        if self.selection is None:
            return
        if excluded:
            self.selection.exclude_all()
        else:
            self.selection.include_all()
        self._refresh_citation_tree()
        self._refresh_metrics()

    def _clear(self):
        self._job_id += 1
        self.txt_input.delete("1.0", tk.END)
        self.txt_output.delete("1.0", tk.END)
        self.document_path = None
        self.result = None
        self.selection = None
        self.var_search.set("")
        self.var_source.set("text")
        self.lbl_file_status.config(text="No document")
        self._refresh_citation_tree()
        self._refresh_metrics()
        for btn in (self.btn_copy, self.btn_save, self.btn_export_refs):
            btn.config(state=tk.DISABLED)
        self.lbl_ref_status.config(text="Run a count to list citations.")
        self.status_var.set("Awaiting input")

    def _copy_to_clipboard(self):
        if not self.result:
            return
        try:
            pyperclip.copy(self.result.body_text)
            self.status_var.set("Body text copied to clipboard.")
        except pyperclip.PyperclipException as e:
            self.status_var.set(f"Clipboard error: {e}")
            self._log(f"CLIPBOARD_FAIL err={e}")

    def _save_text(self):
        if not self.result:
            return
        path = filedialog.asksaveasfilename(defaultextension=".txt")
        if path:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(self.result.body_text)
            self._log(f"SAVE path={path}")

    def _export_citations(self):
        if not self.result or not self.result.citations:
            return
        filename = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV", "*.csv")],
            initialfile="citations.csv",
        )
        if not filename:
            return
        try:
            with open(filename, "w", newline="", encoding="utf-8-sig") as f:
                writer = csv.writer(f)
                writer.writerow(["Citation", "Words", "Occurrences", "Excluded"])
                for entry in self.result.citations:
                    writer.writerow([
                        entry.text,
                        entry.words,
                        entry.occurrences,
                        "yes" if self.selection.is_excluded(entry.text) else "no",
                    ])
            self._log(f"EXPORT path={filename} rows={len(self.result.citations)}")
            messagebox.showinfo("Export", f"Citations exported successfully!\n\n{filename}")
        except OSError as e:
            self._log(f"EXPORT_FAIL path={filename} err={e}")
            messagebox.showerror("Error", f"Failed to export citations:\n{e}")


if __name__ == '__main__':
    root = tk.Tk()
    app = BodyCounterApp(root)
    root.mainloop()
