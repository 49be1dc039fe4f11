import time
from dataclasses import dataclass, field

import psutil  # pip install psutil
from rich.table import Table


@dataclass
class WorkerStats:
    worker_id: int
    current_p: int = None
    tested: int = 0
    found: list = field(default_factory=list)
    p_time: float = 0.0
    start_time: float = field(default_factory=time.time)
    _began: float = field(default=0.0, repr=False)

    def begin(self, p):
        self.current_p = p
        self._began = time.time()

    def finish(self, prime):
        self.tested += 1
        self.p_time = time.time() - self._began
        if prime:
            self.found.append(self.current_p)
        self.current_p = None


#summary rendering
def render_summary(stats, started):
    """Table of what each worker has done so far."""
    now = time.time()
    elapsed = max(now - started, 0.001)
    total_tested = sum(s.tested for s in stats)
    found = sorted(p for s in stats for p in s.found)

    table = Table(title="Workers")
    table.add_column("Worker", style="cyan")
    table.add_column("Current p", style="magenta")
    table.add_column("Tested", style="green")
    table.add_column("Last p calc time", style="yellow")
    table.add_column("Time online", style="bright_blue")
    table.add_column("Found", style="bright_red")

    for s in stats:
        table.add_row(
            str(s.worker_id),
            str(s.current_p),
            str(s.tested),
            f"{s.p_time:.3f}",
            f"{now - s.start_time:.1f}s",
            ", ".join(str(p) for p in s.found),
        )

    lines = [
        f"[bold yellow]Time Elapsed:[/bold yellow] {int(elapsed)}s",
        f"[bold cyan]CPU Usage:[/bold cyan] {psutil.cpu_percent(interval=None):.1f}%",
        f"[bold green]Total Throughput:[/bold green] {total_tested / elapsed:.2f} exponents/sec",
        f"[bold green]Mersenne Primes Found:[/bold green] {len(found)}",
        f"[green]p values:[/green] {found}",
    ]
    return lines, table


def print_summary(console, stats, started):
    lines, table = render_summary(stats, started)
    for line in lines:
        console.print(line)
    console.print(table)
