import io

import pytest

from syslab.jobs import MAXJOBS, Job, JobList, JobState, parseline


@pytest.mark.parametrize(
    "line, argv, bg",
    [
        ("/bin/ls -l\n", ["/bin/ls", "-l"], False),
        ("./myspin 5 &\n", ["./myspin", "5"], True),
        ("   /bin/echo    a   b  \n", ["/bin/echo", "a", "b"], False),
        ("/bin/echo 'hello world' x\n", ["/bin/echo", "hello world", "x"], False),
        ("/bin/echo 'abc\n", ["/bin/echo"], False),
        ("prog &x\n", ["prog"], True),
    ],
)
def test_parseline(line, argv, bg):
    assert parseline(line) == (argv, bg)


@pytest.mark.parametrize("line", ["\n", "    \n", ""])
def test_parseline_blank_line_is_background_with_no_args(line):
    assert parseline(line) == ([], True)


def test_parseline_drops_last_character_always():
    argv, bg = parseline("jobs")
    assert argv == ["job"]
    assert bg is False


def test_add_assigns_increasing_jids():
    jobs = JobList()
    first = jobs.add(10, JobState.BG, "a\n")
    second = jobs.add(20, JobState.FG, "b\n")
    assert first == Job(10, 1, JobState.BG, "a\n")
    assert second.jid == 2
    assert [job.pid for job in jobs] == [10, 20]


def test_add_rejects_nonpositive_pid():
    jobs = JobList()
    assert jobs.add(0, JobState.BG, "x\n") is None
    assert list(jobs) == []


def test_add_to_full_table_reports_and_fails():
    out = io.StringIO()
    jobs = JobList(stream=out)
    for pid in range(1, MAXJOBS + 1):
        assert jobs.add(pid, JobState.BG, "x\n") is not None
    assert jobs.add(999, JobState.BG, "x\n") is None
    assert out.getvalue() == "Tried to create too many jobs\n"
    assert len(list(jobs)) == MAXJOBS
    assert jobs.max_jid() == MAXJOBS


def test_verbose_add_message():
    out = io.StringIO()
    jobs = JobList(verbose=True, stream=out)
    jobs.add(10, JobState.FG, "ls\n")
    assert out.getvalue() == "Added job [1] 10 ls\n\n"


def test_delete_reuses_slot_and_recomputes_next_jid():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.BG, "b\n")
    jobs.add(30, JobState.BG, "c\n")
    assert jobs.delete(10) is True
    new = jobs.add(40, JobState.BG, "d\n")
    assert new.jid == jobs.max_jid()
    assert new.jid > 3
    assert [job.pid for job in jobs] == [40, 20, 30]


def test_delete_highest_jid_lets_it_be_reused():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.BG, "b\n")
    jobs.delete(20)
    assert jobs.add(30, JobState.BG, "c\n").jid == 2


def test_delete_unknown_or_invalid_pid():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    assert jobs.delete(0) is False
    assert jobs.delete(99) is False
    assert [job.pid for job in jobs] == [10]


def test_max_jid_empty_is_zero():
    assert JobList().max_jid() == 0


def test_fg_pid():
    jobs = JobList()
    assert jobs.fg_pid() == 0
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.FG, "b\n")
    assert jobs.fg_pid() == 20
    jobs.by_pid(20).state = JobState.ST
    assert jobs.fg_pid() == 0


def test_lookups():
    jobs = JobList()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.ST, "b\n")
    assert jobs.by_pid(20).jid == 2
    assert jobs.by_jid(1).pid == 10
    assert jobs.by_pid(0) is None
    assert jobs.by_jid(0) is None
    assert jobs.by_jid(5) is None
    assert jobs.pid_to_jid(20) == 2
    assert jobs.pid_to_jid(77) == 0
    assert jobs.pid_to_jid(-1) == 0


def test_listing_format():
    jobs = JobList()
    jobs.add(10, JobState.BG, "./myspin 5 &\n")
    jobs.add(20, JobState.FG, "./myspin 9\n")
    jobs.add(30, JobState.ST, "./mystop 2\n")
    assert jobs.listing() == (
        "[1] (10) Running ./myspin 5 &\n"
        "[2] (20) Foreground ./myspin 9\n"
        "[3] (30) Stopped ./mystop 2\n"
    )


def test_listing_reports_undefined_state():
    jobs = JobList()
    jobs.add(10, JobState.UNDEF, "x\n")
    assert jobs.listing() == "[1] (10) listjobs: Internal error: job[0].state=0 x\n"


def test_listing_empty():
    assert JobList().listing() == ""