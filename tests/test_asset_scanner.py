from asset_scanner import extract_asset_references, extract_stylesheet_images, update_asset_paths


def test_extracts_relative_stylesheets_and_images():
    html = '<link href="../../assets/css/a.css" rel="stylesheet"><img src="../../assets/img/b.png">'

    manifest = extract_asset_references(html)

    assert manifest.stylesheets == ['a.css']
    assert manifest.images == ['b.png']


def test_keeps_document_order_and_duplicates():
    html = """
    <link rel="stylesheet" href="../../assets/css/main.css">
    <link rel="stylesheet" href="../../assets/css/fonts.css">
    <img src="../../assets/img/logo.png">
    <div><img src='../../assets/img/sprites/cta.png'></div>
    <img src="../../assets/img/logo.png">
    """

    manifest = extract_asset_references(html)

    assert manifest.stylesheets == ['main.css', 'fonts.css']
    assert manifest.images == ['logo.png', 'sprites/cta.png', 'logo.png']


def test_ignores_unrecognised_references():
    html = """
    <link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Roboto">
    <link rel="stylesheet" href="assets/css/local.css">
    <img src="data:image/png;base64,AAAA">
    <img src="https://cdn.example.com/assets/img/x.png">
    <script src="../../assets/js/vendor.js"></script>
    <a href="../../assets/img/not-a-stylesheet.png">link</a>
    """

    manifest = extract_asset_references(html)

    assert manifest.stylesheets == []
    assert manifest.images == []


def test_stylesheet_image_references():
    css = """
    #ad { background: url(../img/bg.png) no-repeat; }
    .cta { background-image: url("../img/cta.svg?v=2"); }
    .logo { background: url('../img/logo.png'); }
    .remote { background: url(https://example.com/x.png); }
    .inline { background: url(data:image/png;base64,AAAA); }
    """

    assert extract_stylesheet_images(css) == ['bg.png', 'cta.svg', 'logo.png']


def test_update_asset_paths_flattens_only_asset_prefixes():
    html = ('<link href="../../assets/css/a.css" rel="stylesheet">\n'
            "<img src='../../assets/img/b.png' alt=\"\">\n"
            '<script src="../../assets/js/c.js"></script>\n')

    updated = update_asset_paths(html)

    assert updated == ('<link href="assets/css/a.css" rel="stylesheet">\n'
                       "<img src='assets/img/b.png' alt=\"\">\n"
                       '<script src="../../assets/js/c.js"></script>\n')


def test_unquoted_attributes_are_scanned_and_flattened():
    html = '<link href=../../assets/css/main.css rel=stylesheet><img src=../../assets/img/logo.png alt="">'

    manifest = extract_asset_references(html)
    assert manifest.stylesheets == ['main.css']
    assert manifest.images == ['logo.png']

    assert update_asset_paths(html) == (
        '<link href=assets/css/main.css rel=stylesheet><img src=assets/img/logo.png alt="">'
    )
