from index.term_counter import TermCounter


def test_process_text():
    """Test words are lower-cased, punctuation split and counted"""
    counter = TermCounter("http://a")
    counter.process_text("The cat, the DOG; the cat!")

    assert counter.get("the") == 3, f"Expected 3, actual: {counter.get('the')}"
    assert counter.get("cat") == 2
    assert counter.get("dog") == 1
    assert counter.get("bird") == 0, "Absent terms count as 0"
    assert counter.size() == 6
    assert len(counter) == 3
    assert "cat" in counter


def test_punctuation_splits_words():
    counter = TermCounter("http://a")
    counter.process_text("don't  stop\n\tnow")
    assert sorted(counter.keys()) == ["don", "now", "stop", "t"]


def test_empty_text():
    counter = TermCounter("http://a")
    counter.process_text("  ,.;  ")
    assert len(counter) == 0
    assert counter.size() == 0


def test_process_html_paragraphs():
    """Test only paragraph text is counted"""
    html = """
    <html><head><title>Ignored title</title></head>
    <body>
      <h1>Heading</h1>
      <p>Java is a <b>language</b>.</p>
      <p>Java runs everywhere</p>
    </body></html>
    """
    counter = TermCounter("http://java")
    counter.process_html(html)

    assert counter.get("java") == 2
    assert counter.get("language") == 1
    assert counter.get("heading") == 0, "Headings are not paragraphs"
    assert counter.get("ignored") == 0


def test_process_html_wikipedia_content():
    """Test #mw-content-text restricts counting to the article"""
    html = """
    <div id="mw-navigation"><p>menu menu</p></div>
    <div id="mw-content-text"><p>article text</p></div>
    """
    counter = TermCounter("https://en.wikipedia.org/wiki/X")
    counter.process_html(html)

    assert counter.get("article") == 1
    assert counter.get("menu") == 0, "Paragraphs outside the article are skipped"


def test_punctuation_and_symbols():
    """Test underscores split words while symbols stay part of them"""
    counter = TermCounter("http://a")
    counter.process_text("snake_case costs $5 in c++ «quoted»")

    assert sorted(counter.keys()) == ["$5", "c++", "case", "costs", "in", "quoted", "snake"]
