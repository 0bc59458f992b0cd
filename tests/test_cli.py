from mdsite.cli import main


def base_args(tmp_path, posts_dir, output_dir):
    return [
        "--config",
        str(tmp_path / "missing.toml"),
        "--posts",
        str(posts_dir),
        "--output",
        str(output_dir),
        "--templates",
        str(tmp_path / "templates"),
    ]


def test_main_reports_generated_count(tmp_path, posts_dir, output_dir, make_post, capsys):
    make_post("a.md")
    make_post("b.md")
    make_post("c.md", public=False)

    code = main(base_args(tmp_path, posts_dir, output_dir))

    assert code == 0
    assert "Build successful. Generated 2 post(s)." in capsys.readouterr().out
    assert (output_dir / "index.html").exists()


def test_main_reports_failure(tmp_path, posts_dir, output_dir, capsys):
    (posts_dir / "broken.md").write_text("---\ntitle: x\n", encoding="utf-8")

    code = main(base_args(tmp_path, posts_dir, output_dir))

    captured = capsys.readouterr()
    assert code == 1
    assert "Build failed:" in captured.err
    assert "broken.md" in captured.err
    assert not output_dir.exists()


def test_main_reads_defaults_from_config_file(tmp_path, posts_dir, output_dir, make_post, capsys):
    make_post("post.md")
    config_path = tmp_path / "site.toml"
    config_path.write_text(
        f'posts = "{posts_dir.as_posix()}"\n'
        f'output = "{output_dir.as_posix()}"\n'
        'site_name = "From Config"\n'
        "build_workers = 2\n",
        encoding="utf-8",
    )

    code = main(["--config", str(config_path), "--templates", str(tmp_path / "templates")])

    assert code == 0
    assert "From Config" in (output_dir / "index.html").read_text(encoding="utf-8")


def test_command_line_overrides_config_file(tmp_path, posts_dir, output_dir, make_post):
    make_post("post.md")
    config_path = tmp_path / "site.json"
    config_path.write_text('{"site_name": "From Config"}', encoding="utf-8")

    code = main(
        base_args(tmp_path, posts_dir, output_dir)[2:]
        + ["--config", str(config_path), "--site-name", "From Flag"]
    )

    assert code == 0
    assert "From Flag" in (output_dir / "index.html").read_text(encoding="utf-8")
